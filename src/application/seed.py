"""Demo classroom roster, created on first start."""

from typing import Tuple

import structlog

from src.domain.entities import AccountRole
from src.domain.interfaces import UnitOfWorkFactory
from src.service.rules import BankingRulesSettings, rules_settings

from .services.account_service import AccountService

logger = structlog.get_logger(__name__)

ADMINISTRATORS: Tuple[str, ...] = ("Panda43", "Tiger72", "Eagle19", "Shark88")

STUDENTS: Tuple[str, ...] = (
    "Lion12", "Zebra34", "Monkey56", "Rabbit21", "Dog77", "Cat90",
    "Owl15", "Frog62", "Snake48", "Turtle09", "Whale33", "Penguin66",
    "Bee25", "Ant14", "Cow81", "Pig52", "Duck07", "Horse68",
    "Goat39", "Koala44", "Panda11", "Fox59", "Bear70", "Deer26",
    "Otter18", "Llama95",
)


async def seed_demo_accounts(
    uow_factory: UnitOfWorkFactory,
    settings: BankingRulesSettings = rules_settings,
) -> int:
    """
    Create the demo roster if the store has no accounts yet.

    Returns:
        Number of accounts created (0 when the store was not empty)
    """
    async with uow_factory() as uow:
        if await uow.accounts.count() > 0:
            return 0

        roster = [(name, AccountRole.ADMINISTRATOR) for name in ADMINISTRATORS]
        roster += [(name, AccountRole.STANDARD) for name in STUDENTS]

        for username, role in roster:
            await uow.accounts.add(AccountService.new_account(username, role, settings))

    logger.info(
        "demo_accounts_seeded",
        administrators=len(ADMINISTRATORS),
        students=len(STUDENTS),
    )
    return len(roster)
