"""
状态公告API
"""
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, Query

from apps.dependencies.auth import get_current_user
from apps.dependencies.status import get_status_service
from apps.form.status.form import StatusCheckQuery, StatusCreateForm, StatusListQuery, StatusUpdateForm
from apps.services.status_service import StatusLookupService
from apps.utils import response
from apps.utils.field_map import from_wire, to_wire, to_wire_list
from config import STATUS_PAGE_SIZE_MAX

router = APIRouter(prefix="/status", tags=["状态公告"])


@router.get("", summary="获取状态公告列表", dependencies=[Depends(get_current_user)])
async def get_status_list(
        query: Annotated[StatusListQuery, Query()],
        service: StatusLookupService = Depends(get_status_service),
):
    items, total = await service.list(
        window=query.filter,
        skip=query.skip,
        limit=min(query.limit, STATUS_PAGE_SIZE_MAX),
    )
    return response(data=to_wire_list(items), total=total, message="获取状态公告列表成功")


@router.get("/check", summary="查询当前适用的状态公告", description="客户端调用，无需登录")
async def check_status(
        query: Annotated[StatusCheckQuery, Query()],
        service: StatusLookupService = Depends(get_status_service),
):
    items = await service.check(query.device_type, query.device_version, query.app_version)
    return response(data=to_wire_list(items))


@router.post("", summary="创建状态公告", dependencies=[Depends(get_current_user)])
async def create_status(form: StatusCreateForm, service: StatusLookupService = Depends(get_status_service)):
    status = await service.add(from_wire(form.model_dump()))
    return response(data=to_wire(status), message="状态公告创建成功")


@router.put("/{status_id}", summary="更新状态公告", dependencies=[Depends(get_current_user)])
async def update_status(status_id: int, form: StatusUpdateForm,
                        service: StatusLookupService = Depends(get_status_service)):
    status = await service.update(status_id, from_wire(form.model_dump(exclude_unset=True)))
    return response(data=to_wire(status), message="状态公告更新成功")


@router.put("/{status_id}/{action}", summary="启用/停用状态公告", dependencies=[Depends(get_current_user)])
async def switch_status(status_id: int, action: Literal["activate", "deactivate"],
                        service: StatusLookupService = Depends(get_status_service)):
    status = await service.set_activation(status_id, action == "activate")
    return response(data=to_wire(status), message="状态公告已启用" if action == "activate" else "状态公告已停用")


@router.delete("/{status_id}", summary="删除状态公告", dependencies=[Depends(get_current_user)])
async def delete_status(status_id: int, service: StatusLookupService = Depends(get_status_service)):
    await service.remove(status_id)
    return response(message="状态公告删除成功")
