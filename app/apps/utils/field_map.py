"""
模型字段 <-> 接口字段 映射表

只在接口边界转换一次，其余代码一律使用模型字段名。
"""
from typing import Any, Dict, Iterable

STATUS_FIELD_MAP = {
    "id": "id",
    "device_types": "device_types",
    "device_sem_version": "device_sem_version",
    "app_sem_version": "app_sem_version",
    "start_time": "start_time",
    "end_time": "end_time",
    "is_activated": "is_activated",
    "type": "type",
    "title": "title",
    "contents": "contents",
    "url": "url",
    "created_at": "create_time",
    "updated_at": "update_time",
}
STATUS_WIRE_MAP = {wire: attr for attr, wire in STATUS_FIELD_MAP.items()}


def to_wire(obj, field_map: Dict[str, str] = STATUS_FIELD_MAP) -> Dict[str, Any]:
    return {wire: getattr(obj, attr, None) for attr, wire in field_map.items()}


def to_wire_list(objs: Iterable, field_map: Dict[str, str] = STATUS_FIELD_MAP):
    return [to_wire(obj, field_map) for obj in objs]


def from_wire(data: Dict[str, Any], wire_map: Dict[str, str] = STATUS_WIRE_MAP) -> Dict[str, Any]:
    """未知字段直接丢弃"""
    return {wire_map[key]: value for key, value in data.items() if key in wire_map}
