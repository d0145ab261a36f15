# admin_panel/users.py
import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .auth import require_admin
from .database import get_session
from .errors import NotFound
from .models import User
from .schemas import Message, UserOut, UserRoleResult, UserRoleUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/users", tags=["users"], dependencies=[Depends(require_admin)])


# 👥 Все пользователи (без password_hash)
@router.get("", response_model=List[UserOut])
async def list_users(session: AsyncSession = Depends(get_session)):
    result = await session.execute(select(User).order_by(User.id))
    return result.scalars().all()


# ❌ Удаление пользователя
@router.delete("/{user_id}", response_model=Message)
async def delete_user(user_id: int, session: AsyncSession = Depends(get_session)):
    result = await session.execute(delete(User).where(User.id == user_id))
    if result.rowcount == 0:
        logger.warning("Delete of missing user %s", user_id)
        raise NotFound("User not found")
    await session.commit()
    logger.info("Deleted user %s", user_id)
    return {"message": "User deleted successfully"}


# 🔄 Смена роли
@router.put("/{user_id}/role", response_model=UserRoleResult)
async def update_user_role(
    user_id: int,
    payload: UserRoleUpdate,
    session: AsyncSession = Depends(get_session),
):
    user = await session.get(User, user_id)
    if user is None:
        raise NotFound("User not found")

    user.role = payload.role
    await session.commit()
    await session.refresh(user)
    logger.info("User %s role set to %s", user_id, payload.role)
    return {"message": "User role updated", "user": user}
