"""
Godown stock and the hooks that run when a maal in receipt is approved.

Approval is the point where received material counts as stock. Hooks run
inside the approving transaction, so a failing hook rolls the approval back.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Callable, List

from sqlalchemy.orm import Session

from godam.logger_config import logger
from godam.models.maal_in import MaalIn
from godam.models.stock import GodownStock

ApprovalHook = Callable[[Session, MaalIn], None]

_approval_hooks: List[ApprovalHook] = []


def register_approval_hook(hook: ApprovalHook) -> ApprovalHook:
    """Register ``hook(db, maal_in)`` to run on every approval. Usable as a decorator."""
    _approval_hooks.append(hook)
    return hook


def unregister_approval_hook(hook: ApprovalHook) -> None:
    if hook in _approval_hooks:
        _approval_hooks.remove(hook)


def run_approval_hooks(db: Session, maal_in: MaalIn) -> None:
    for hook in list(_approval_hooks):
        logger.debug(f"Running approval hook {hook.__name__} for maal in {maal_in.id}")
        hook(db, maal_in)


@register_approval_hook
def add_received_weight_to_stock(db: Session, maal_in: MaalIn) -> None:
    """Add each approved item's weight to the godown's stock of that material."""
    weights = defaultdict(lambda: Decimal("0"))
    for item in maal_in.items:
        weights[item.material] += Decimal(str(item.weight or 0))

    for material, weight in weights.items():
        stock = (
            db.query(GodownStock)
            .filter(
                GodownStock.company_id == maal_in.company_id,
                GodownStock.godown_id == maal_in.godown_id,
                GodownStock.material == material,
            )
            .first()
        )

        if stock:
            before = stock.weight
            stock.weight = Decimal(str(stock.weight or 0)) + weight
        else:
            before = Decimal("0")
            stock = GodownStock(
                company_id=maal_in.company_id,
                godown_id=maal_in.godown_id,
                material=material,
                weight=weight,
            )
            db.add(stock)

        logger.info(
            f"Stock updated - Godown: {maal_in.godown_id}, Material: {material}, "
            f"Weight: {before} → {stock.weight}"
        )


def get_godown_stock(db: Session, company_id: str, godown_id: str) -> List[GodownStock]:
    return (
        db.query(GodownStock)
        .filter(
            GodownStock.company_id == company_id,
            GodownStock.godown_id == godown_id,
        )
        .order_by(GodownStock.material.asc())
        .all()
    )
