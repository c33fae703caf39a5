"""CLI adapter printing every account with its recalculated balance."""

from src.application.use_cases.get_account_balances import (
    GetAccountBalancesUseCase,
)
from src.infrastructure.container import build_ledger_repository
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import quantize_amount


def main() -> None:
    """Replay the ledger and print account balances."""
    logger = get_app_logger()
    use_case = GetAccountBalancesUseCase(
        ledger_repository=build_ledger_repository(),
        logger=logger,
    )

    accounts = use_case.execute()

    if not accounts:
        print("No accounts found.")
        return
    for account in accounts:
        print(
            f"{account.name} ({account.account_type.value}): "
            f"opening={quantize_amount(account.opening_balance)}, "
            f"balance={quantize_amount(account.current_balance)}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
