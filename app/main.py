# app/main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.common.errors import register_error_handlers

# 強制引用所有 Model，讓 SQLAlchemy 知道要建表
from app.db.session import engine
from app.db.base_class import Base
from app.models.account import Account
from app.models.content import Post, Poll

from app.routers import friends, users, search

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# 啟動時自動檢查並建立缺少的表格
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Social Graph API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# 註冊路由
app.include_router(friends.router, prefix="/api/v1/friends", tags=["friends"])
app.include_router(users.router, prefix="/api/v1/users", tags=["users"])
app.include_router(search.router, prefix="/api/v1/search", tags=["search"])

@app.get("/")
def read_root():
    return {"message": "Social Graph API is running!"}
