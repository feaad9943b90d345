import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from vdv_inventory.core.constants import TAG_BATCH_MAX, TAG_BATCH_MIN, TagStatus
from vdv_inventory.core.errors import Conflict, InventoryError, NotFound, ValidationError
from vdv_inventory.crud import machine as machine_crud
from vdv_inventory.crud.base import commit_or_raise, flush_or_raise
from vdv_inventory.models import AssetTag, Machine
from vdv_inventory.schemas.asset_tag import TagView
from vdv_inventory.schemas.machine import MachineCreate, MachinePublicView
from vdv_inventory.utils.security import generate_token

log = logging.getLogger(__name__)


async def get_tags(db: AsyncSession, status: Optional[TagStatus] = None):
    query = select(AssetTag)
    if status:
        query = query.where(AssetTag.status == status)
    result = await db.execute(query.order_by(AssetTag.created_at.desc()))
    return result.scalars().all()


async def get_tag(db: AsyncSession, token: str) -> AssetTag:
    result = await db.execute(
        select(AssetTag)
        .where(AssetTag.token == token)
        .execution_options(populate_existing=True)
    )
    tag = result.scalar_one_or_none()
    if not tag:
        raise NotFound("Tag not found")
    return tag


async def generate_batch(db: AsyncSession, count) -> list:
    """Create ``count`` fresh unlinked tags ready for printing."""
    if isinstance(count, bool) or not isinstance(count, int) or not TAG_BATCH_MIN <= count <= TAG_BATCH_MAX:
        raise ValidationError(f"Count must be between {TAG_BATCH_MIN} and {TAG_BATCH_MAX}")

    tokens = set()
    while len(tokens) < count:
        tokens.add(generate_token())

    tags = [AssetTag(token=token, status=TagStatus.unlinked) for token in tokens]
    db.add_all(tags)
    await commit_or_raise(db, "Token collision while generating tags, try again", Conflict)

    log.info("generated %s asset tags", count)
    result = await db.execute(
        select(AssetTag).where(AssetTag.token.in_(tokens)).order_by(AssetTag.token)
    )
    return result.scalars().all()


async def _tag_for_machine(db: AsyncSession, machine_id: str) -> Optional[AssetTag]:
    result = await db.execute(select(AssetTag).where(AssetTag.machine_id == machine_id))
    return result.scalar_one_or_none()


async def link_tag(db: AsyncSession, token: str, machine_ref: str, commit: bool = True) -> AssetTag:
    """unlinked -> linked. Rejects rather than overwrites an existing binding."""
    tag = await get_tag(db, token)
    if tag.status == TagStatus.linked:
        raise Conflict("Tag is already linked to a machine")

    machine = await machine_crud.find_machine(db, machine_ref)
    if not machine:
        raise NotFound("Machine not found")

    existing = await _tag_for_machine(db, machine.id)
    if existing and existing.id != tag.id:
        raise Conflict("Machine already has a tag linked")

    tag.status = TagStatus.linked
    tag.machine_id = machine.id
    tag.linked_at = datetime.utcnow()
    await flush_or_raise(db, "Machine already has a tag linked", Conflict)

    if commit:
        await db.commit()
    log.info("tag linked: token=%s machine=%s", tag.token, machine.machine_id)
    return await get_tag(db, token)


async def unlink_tag(db: AsyncSession, token: str) -> AssetTag:
    """linked -> unlinked. The token stays valid for relinking."""
    tag = await get_tag(db, token)
    if tag.status != TagStatus.linked:
        raise Conflict("Tag is not linked")

    machine_id = tag.machine_id
    tag.status = TagStatus.unlinked
    tag.machine_id = None
    tag.linked_at = None
    await db.commit()

    log.info("tag unlinked: token=%s machine=%s", tag.token, machine_id)
    return await get_tag(db, token)


async def create_machine_with_tag(db: AsyncSession, token: str, data: MachineCreate) -> Machine:
    """Create a machine and bind ``token`` to it in a single transaction."""
    tag = await get_tag(db, token)
    if tag.status == TagStatus.linked:
        raise Conflict("Tag is already linked to a machine")

    try:
        machine = await machine_crud.add_machine(db, data)
        await link_tag(db, token, machine.id, commit=False)
        await commit_or_raise(db, "Machine could not be linked to tag", Conflict)
    except InventoryError:
        await db.rollback()
        raise

    log.info("machine created from tag: token=%s machine=%s", token, machine.machine_id)
    return await machine_crud.get_machine(db, machine.id)


async def get_tag_view(db: AsyncSession, token: str, include_credentials: bool = False) -> TagView:
    """Resolve a scanned token.

    A token is either a machine's own generated QR token or a pre-printed
    asset tag. Unknown tokens raise ``NotFound``.
    """
    machine = await machine_crud.get_machine_by_qr_token(db, token)
    if machine:
        # No asset tag behind a machine's own token, so there is no link time
        return TagView(
            token=token,
            status=TagStatus.linked,
            machine=MachinePublicView.from_machine(machine, include_credentials),
        )

    tag = await get_tag(db, token)
    view = TagView(token=tag.token, status=tag.status, linked_at=tag.linked_at)
    if tag.status == TagStatus.linked and tag.machine:
        view.machine = MachinePublicView.from_machine(tag.machine, include_credentials)
    return view
