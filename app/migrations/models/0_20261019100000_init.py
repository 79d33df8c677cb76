from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "aerich" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSONB NOT NULL
);
CREATE TABLE IF NOT EXISTS "status" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "created_at" TIMESTAMPTZ NOT NULL  DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL  DEFAULT CURRENT_TIMESTAMP,
    "device_types" JSONB NOT NULL,
    "device_sem_version" VARCHAR(255) NOT NULL,
    "app_sem_version" VARCHAR(255) NOT NULL,
    "start_time" TIMESTAMPTZ,
    "end_time" TIMESTAMPTZ,
    "is_activated" BOOL NOT NULL  DEFAULT False,
    "type" VARCHAR(50) NOT NULL,
    "title" VARCHAR(200) NOT NULL,
    "contents" TEXT,
    "url" VARCHAR(500)
);
CREATE INDEX IF NOT EXISTS "idx_status_end_tim_5f0c2a" ON "status" ("end_time");
COMMENT ON COLUMN "status"."id" IS '公告ID';
COMMENT ON COLUMN "status"."created_at" IS '创建时间';
COMMENT ON COLUMN "status"."updated_at" IS '更新时间';
COMMENT ON COLUMN "status"."device_types" IS '设备类型列表，* 表示全部';
COMMENT ON COLUMN "status"."device_sem_version" IS '设备系统版本表达式';
COMMENT ON COLUMN "status"."app_sem_version" IS '应用版本表达式';
COMMENT ON COLUMN "status"."start_time" IS '开始时间';
COMMENT ON COLUMN "status"."end_time" IS '结束时间';
COMMENT ON COLUMN "status"."is_activated" IS '是否启用';
COMMENT ON COLUMN "status"."type" IS '公告类型';
COMMENT ON COLUMN "status"."title" IS '公告标题';
COMMENT ON COLUMN "status"."contents" IS '公告内容';
COMMENT ON COLUMN "status"."url" IS '跳转链接';
COMMENT ON TABLE "status" IS '状态公告表';
CREATE TABLE IF NOT EXISTS "user" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "created_at" TIMESTAMPTZ NOT NULL  DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL  DEFAULT CURRENT_TIMESTAMP,
    "username" VARCHAR(20) NOT NULL UNIQUE,
    "password" VARCHAR(128) NOT NULL,
    "is_active" BOOL NOT NULL  DEFAULT True
);
CREATE INDEX IF NOT EXISTS "idx_user_usernam_9987ab" ON "user" ("username");
COMMENT ON COLUMN "user"."id" IS '用户ID';
COMMENT ON COLUMN "user"."created_at" IS '创建时间';
COMMENT ON COLUMN "user"."updated_at" IS '更新时间';
COMMENT ON COLUMN "user"."username" IS '用户名';
COMMENT ON COLUMN "user"."password" IS '密码';
COMMENT ON COLUMN "user"."is_active" IS '是否可用';
COMMENT ON TABLE "user" IS '管理员表';"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        """
