"""Use cases deriving account balances and card usage."""

from decimal import Decimal

from finledger.application.ports.derived_cache import DerivedCachePort
from finledger.application.ports.ledger_repository import LedgerRepositoryPort
from finledger.application.use_cases.caching import cached
from finledger.domain.models import (
    Account,
    AccountWithBalance,
    Card,
    CardPortfolio,
    CardWithUsage,
)
from finledger.domain.policies import Aggregate, ensure_owned, require_user
from finledger.domain.services import (
    compute_account_balance,
    compute_card_usage,
    summarize_card_portfolio,
)
from finledger.infrastructure.logging.logger import get_app_logger


class ComputeAccountBalanceUseCase:
    """Derive the current balance of a single account."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            ledger_repository: Port providing ledger rows.
            cache: Optional derived-value cache.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._ledger_repository = ledger_repository
        self._cache = cache
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str | None, account_guid: str) -> Decimal:
        """Return the balance of an account owned by the caller.

        Raises:
            Unauthorized: If the caller has no identity.
            NotFound: If the account is unknown or owned by someone else.
        """
        owner = require_user(user_id)
        account = ensure_owned(
            self._ledger_repository.fetch_account(account_guid),
            owner,
            "account",
            account_guid,
        )
        return self.balance_of(account)

    def balance_of(self, account: Account) -> Decimal:
        """Return the balance of an already authorized account."""
        return cached(
            self._cache,
            (Aggregate.ACCOUNT_BALANCE, account.guid),
            lambda: self._compute(account),
        )

    def _compute(self, account: Account) -> Decimal:
        transactions = self._ledger_repository.fetch_account_transactions(
            account.guid
        )
        transfers = self._ledger_repository.fetch_account_transfers(
            account.guid
        )
        balance = compute_account_balance(account, transactions, transfers)
        self._logger.info(
            f"Balance computed for account={account.guid}: {balance} "
            f"({len(transactions)} transactions, {len(transfers)} transfers)"
        )
        return balance


class GetAccountBalancesUseCase:
    """List the accounts of a user with their current balances."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._balances = ComputeAccountBalanceUseCase(
            ledger_repository,
            cache=cache,
            logger=self._logger,
        )

    def execute(self, user_id: str | None) -> list[AccountWithBalance]:
        """Return every account of the caller with current_balance."""
        owner = require_user(user_id)
        accounts = self._ledger_repository.fetch_accounts(owner)
        result = [
            AccountWithBalance(
                guid=account.guid,
                name=account.name,
                bank=account.bank,
                account_type=account.account_type,
                initial_balance=account.initial_balance,
                current_balance=self._balances.balance_of(account),
            )
            for account in accounts
        ]
        self._logger.info(f"Fetched {len(result)} accounts for user={owner}")
        return result

    def total_balance(self, user_id: str | None) -> Decimal:
        """Return the sum of the current balances of the caller."""
        return sum(
            (account.current_balance for account in self.execute(user_id)),
            Decimal("0"),
        )


class ComputeCardUsageUseCase:
    """Derive the usage of a single card."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._cache = cache
        self._logger = logger or get_app_logger()

    def execute(self, user_id: str | None, card_guid: str) -> Decimal:
        """Return the usage of a card owned by the caller.

        Raises:
            Unauthorized: If the caller has no identity.
            NotFound: If the card is unknown or owned by someone else.
        """
        owner = require_user(user_id)
        card = ensure_owned(
            self._ledger_repository.fetch_card(card_guid),
            owner,
            "card",
            card_guid,
        )
        return self.usage_of(card)

    def usage_of(self, card: Card) -> Decimal:
        """Return the usage of an already authorized card."""
        return cached(
            self._cache,
            (Aggregate.CARD_USAGE, card.guid),
            lambda: compute_card_usage(
                self._ledger_repository.fetch_card_transactions(card.guid)
            ),
        )


class GetCardsWithUsageUseCase:
    """List the cards of a user with usage and portfolio totals."""

    def __init__(
        self,
        ledger_repository: LedgerRepositoryPort,
        cache: DerivedCachePort | None = None,
        logger=None,
    ) -> None:
        self._ledger_repository = ledger_repository
        self._logger = logger or get_app_logger()
        self._usage = ComputeCardUsageUseCase(
            ledger_repository,
            cache=cache,
            logger=self._logger,
        )

    def execute(self, user_id: str | None) -> CardPortfolio:
        """Return every card of the caller with current_usage."""
        owner = require_user(user_id)
        cards = [
            CardWithUsage(
                guid=card.guid,
                name=card.name,
                brand=card.brand,
                credit_limit=card.credit_limit,
                close_day=card.close_day,
                due_day=card.due_day,
                current_usage=self._usage.usage_of(card),
            )
            for card in self._ledger_repository.fetch_cards(owner)
        ]
        portfolio = summarize_card_portfolio(cards)
        self._logger.info(
            f"Fetched {len(cards)} cards for user={owner}: "
            f"usage={portfolio.total_usage}, limit={portfolio.total_limit}"
        )
        return portfolio


__all__ = [
    "ComputeAccountBalanceUseCase",
    "GetAccountBalancesUseCase",
    "ComputeCardUsageUseCase",
    "GetCardsWithUsageUseCase",
]
