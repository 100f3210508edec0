import logging
from decimal import Decimal
from sqlalchemy.ext.asyncio import AsyncSession
from fastapi import HTTPException
from app.core.utils import ZERO, qround
from app.db.repository import Repository
from app.models.base import utcnow
from app.models.split import Split, SplitParticipant
from app.schemas.split import SplitCreate, PayRequest
from app.schemas.user import AuthUser

logger = logging.getLogger(__name__)


def split_repo(db: AsyncSession) -> Repository[Split]:
    return Repository(db, Split)


def compute_remaining_amount(split: Split) -> Decimal:
    paid = sum((Decimal(p.paid_amount or 0) for p in split.participants), ZERO)
    return max(ZERO, qround(Decimal(split.total_amount) - paid))


def serialize_split(split: Split) -> dict:
    return {
        "id": split.id,
        "title": split.title,
        "total_amount": float(qround(Decimal(split.total_amount))),
        "read": split.read,
        "created_at": split.created_at,
        "remaining": float(compute_remaining_amount(split)),
        "participants": [
            {
                "id": p.id,
                "name": p.name,
                "share_amount": float(qround(Decimal(p.share_amount))),
                "paid_amount": float(qround(Decimal(p.paid_amount or 0))),
                "role": p.role,
                "status": p.status,
                "paid_at": p.paid_at,
            }
            for p in split.participants
        ],
    }


async def _get_own_split(db: AsyncSession, split_id: str, user: AuthUser) -> Split:
    split = await split_repo(db).get(split_id)
    if not split or split.user_id != user.id:
        raise HTTPException(404, "Split not found")
    return split


async def list_splits(db: AsyncSession, user: AuthUser, status: str = "open", search: str = ""):
    items = await split_repo(db).list(user_id=user.id)

    if status == "open":
        items = [s for s in items if compute_remaining_amount(s) > 0]
    elif status == "settled":
        items = [s for s in items if compute_remaining_amount(s) == 0]

    if search:
        q = search.lower()
        items = [
            s for s in items
            if q in s.title.lower() or any(q in p.name.lower() for p in s.participants)
        ]

    return [serialize_split(s) for s in items]


async def create_split(db: AsyncSession, data: SplitCreate, user: AuthUser):
    title = data.title.strip()
    if not title:
        raise HTTPException(400, "Missing required fields: title, total_amount, participants")

    ids = [p.id for p in data.participants if p.id]
    if len(ids) != len(set(ids)):
        raise HTTPException(400, "Duplicate participant ids")

    participants = []
    for p in data.participants:
        kwargs = {}
        if p.id:
            kwargs["id"] = p.id
        participants.append(SplitParticipant(
            name=p.name.strip(),
            share_amount=qround(p.share_amount),
            paid_amount=min(qround(p.paid_amount), qround(p.share_amount)),
            role=p.role,
            status=p.status,
            **kwargs,
        ))

    split = Split(
        user_id=user.id,
        title=title,
        total_amount=qround(data.total_amount),
        participants=participants,
    )

    await split_repo(db).insert(split)
    await db.commit()

    logger.info("Split %s created with %d participant(s)", split.id, len(participants))
    return serialize_split(split)


async def get_split(db: AsyncSession, split_id: str, user: AuthUser):
    split = await _get_own_split(db, split_id, user)
    return serialize_split(split)


async def mark_paid(db: AsyncSession, split_id: str, data: PayRequest, user: AuthUser):
    split = await _get_own_split(db, split_id, user)

    participant = next((p for p in split.participants if p.id == data.participant_id), None)
    if not participant:
        raise HTTPException(404, "Participant not found")

    share = Decimal(participant.share_amount)
    already_paid = Decimal(participant.paid_amount or 0)

    # default: settle whatever is still outstanding
    pay_amount = data.amount if data.amount is not None else share - already_paid

    participant.paid_amount = min(qround(already_paid + pay_amount), qround(share))
    participant.status = "paid" if participant.paid_amount >= qround(share) else "partial"
    participant.paid_at = utcnow()

    await db.flush()
    await db.commit()

    remaining = compute_remaining_amount(split)
    logger.info("Split %s: participant %s paid, %s remaining", split.id, participant.id, remaining)

    return {"split": serialize_split(split), "remaining": float(remaining)}


async def mark_read(db: AsyncSession, split_id: str, read: bool, user: AuthUser):
    split = await _get_own_split(db, split_id, user)

    await split_repo(db).update(split, read=bool(read))
    await db.commit()

    return serialize_split(split)
