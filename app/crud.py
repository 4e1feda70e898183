import secrets
import string

import models
from errors import DuplicateCodeError
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

# Same alphabet as nanoid: URL-safe, 64 symbols
ALPHABET = string.ascii_letters + string.digits + "_-"
CODE_LENGTH = 8
MAX_INSERT_ATTEMPTS = 5

def generate_code(length: int = CODE_LENGTH) -> str:
    return "".join(secrets.choice(ALPHABET) for _ in range(length))

def unused_code(db: Session) -> str:
    code = generate_code()
    while get_link(db, code):
        code = generate_code()
    return code

def create_link(db: Session, original_url: str, custom_code: str | None = None) -> models.ShortLink:
    if custom_code and get_link(db, custom_code):
        raise DuplicateCodeError(custom_code)
    for _ in range(MAX_INSERT_ATTEMPTS):
        code = custom_code or unused_code(db)
        link = models.ShortLink(original_url=original_url, short_code=code, clicks=0)
        db.add(link)
        try:
            db.commit()
        except IntegrityError:
            # another request claimed the code between the check and the insert
            db.rollback()
            if custom_code:
                raise DuplicateCodeError(code)
            continue
        db.refresh(link)
        return link
    raise DuplicateCodeError(code)

def get_link(db: Session, code: str) -> models.ShortLink | None:
    return db.query(models.ShortLink).filter_by(short_code=code).first()

def get_link_by_url(db: Session, original_url: str) -> models.ShortLink | None:
    return (
        db.query(models.ShortLink)
        .filter_by(original_url=original_url)
        .order_by(models.ShortLink.id)
        .first()
    )

def get_links(db: Session) -> list[models.ShortLink]:
    return (
        db.query(models.ShortLink)
        .order_by(models.ShortLink.created_at.desc(), models.ShortLink.id.desc())
        .all()
    )

def count_links(db: Session) -> int:
    return db.query(models.ShortLink).count()

def increment_click(db: Session, code: str) -> models.ShortLink | None:
    """Bump the counter and access time in one UPDATE statement.

    The increment is evaluated by the database, so concurrent redirects on
    the same code are all counted.
    """
    result = db.execute(
        update(models.ShortLink)
        .where(models.ShortLink.short_code == code)
        .values(clicks=models.ShortLink.clicks + 1, last_accessed=models.utcnow())
        .execution_options(synchronize_session=False)
    )
    db.commit()
    if result.rowcount == 0:
        return None
    return get_link(db, code)

def delete_link(db: Session, link_id) -> bool:
    try:
        link_id = int(link_id)
    except (TypeError, ValueError):
        return False
    link = db.get(models.ShortLink, link_id)
    if not link:
        return False
    db.delete(link)
    db.commit()
    return True
