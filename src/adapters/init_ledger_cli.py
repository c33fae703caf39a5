"""CLI adapter preparing the ledger storage and seeding starter data."""

from src.infrastructure.container import build_ledger_repository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.seed_data import default_snapshot


def main() -> None:
    """Create the ledger storage and seed it when empty."""
    logger = get_app_logger()
    repository = build_ledger_repository()
    repository.prepare_schema()

    if not repository.is_empty():
        logger.info("Ledger already initialized; skipping seed data.")
        print("Ledger already initialized.")
        return

    snapshot = default_snapshot()
    repository.save_snapshot(snapshot)
    print(
        f"Seeded ledger with {len(snapshot.accounts)} accounts, "
        f"{len(snapshot.transactions)} transactions and "
        f"{len(snapshot.budgets)} budgets."
    )


if __name__ == "__main__":  # pragma: no cover
    main()
