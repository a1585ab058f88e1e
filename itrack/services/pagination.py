import math
from sqlalchemy import select, func, Select
from sqlalchemy.orm import Session
from itrack.schemas.pagination import Page


def paginate(db: Session, query: Select, page: int = 1, size: int = 50) -> Page:
    total = db.scalar(select(func.count()).select_from(query.subquery()))
    rows = db.scalars(query.offset((page - 1) * size).limit(size)).all()
    return Page(
        items=rows,
        total=total,
        page=page,
        pages=math.ceil(total / size) if total else 1,
        size=size,
    )
