"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth / authority
  2xxx: Identity
  3xxx: Market / settlement
  4xxx: Position / claim
  5xxx: Collateral
  6xxx: Liquidity
  9xxx: System

Every error also carries an ErrorKind so callers can branch on the failure
class (unauthorized, not found, invalid state, ...) without knowing codes.
"""

from src.ds_common.enums import ErrorKind


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        kind: ErrorKind = ErrorKind.INTERNAL,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.kind = kind
        super().__init__(message)


# --- 1xxx: Auth / authority ---

class NotOwnerError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(1001, f"Caller is not the owner: {caller}", 403, ErrorKind.UNAUTHORIZED)


class NotSettlerError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(1002, f"Caller is not the settler: {caller}", 403, ErrorKind.UNAUTHORIZED)


class InvalidForwarderError(AppError):
    def __init__(self, caller: str) -> None:
        super().__init__(
            1003, f"Caller is not the report forwarder: {caller}", 403, ErrorKind.UNAUTHORIZED
        )


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Invalid or expired token", 401, ErrorKind.UNAUTHORIZED)


class InvalidAddressError(AppError):
    def __init__(self, value: str) -> None:
        super().__init__(1005, f"Invalid address: {value}", 422, ErrorKind.INVALID_INPUT)


# --- 2xxx: Identity ---

class NotVerifiedError(AppError):
    def __init__(self, account: str) -> None:
        super().__init__(2001, f"Account is not verified: {account}", 403, ErrorKind.UNAUTHORIZED)


class ProofAlreadyUsedError(AppError):
    def __init__(self, nullifier_hash: int) -> None:
        super().__init__(
            2002, f"Proof already used: nullifier {nullifier_hash:#x}", 409, ErrorKind.ALREADY_DONE
        )


class ProofInvalidError(AppError):
    def __init__(self) -> None:
        super().__init__(2003, "Identity proof rejected by verifier", 422, ErrorKind.EXTERNAL_FAILURE)


class IdentityVerifierError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(
            2004, f"Identity verifier unavailable: {detail}", 502, ErrorKind.EXTERNAL_FAILURE
        )


# --- 3xxx: Market / settlement ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404, ErrorKind.NOT_FOUND)


class MarketAlreadySettledError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(
            3002, f"Market already settled: {market_id}", 409, ErrorKind.INVALID_STATE
        )


class MarketNotSettledError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(3003, f"Market not settled: {market_id}", 422, ErrorKind.INVALID_STATE)


class InvalidOutcomeError(AppError):
    def __init__(self, outcome: int) -> None:
        super().__init__(3004, f"Invalid outcome code: {outcome}", 422, ErrorKind.INVALID_INPUT)


class InvalidReportLengthError(AppError):
    def __init__(self, length: int, record_size: int) -> None:
        super().__init__(
            3005,
            f"Invalid report length: {length} bytes is not a positive multiple of {record_size}",
            422,
            ErrorKind.INVALID_INPUT,
        )


class InvalidReportEncodingError(AppError):
    def __init__(self, field: str) -> None:
        super().__init__(
            3006, f"Invalid report encoding: {field} is not hex", 422, ErrorKind.INVALID_INPUT
        )


# --- 4xxx: Position / claim ---

class InvalidAmountError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, f"Invalid amount: {detail}", 422, ErrorKind.INVALID_INPUT)


class InvalidSideError(AppError):
    def __init__(self, side: object) -> None:
        super().__init__(4002, f"Invalid side: {side}", 422, ErrorKind.INVALID_INPUT)


class AlreadyClaimedError(AppError):
    def __init__(self, market_id: int, account: str) -> None:
        super().__init__(
            4003, f"Already claimed: market {market_id}, account {account}", 409,
            ErrorKind.ALREADY_DONE,
        )


class NothingToClaimError(AppError):
    def __init__(self, market_id: int, account: str) -> None:
        super().__init__(
            4004, f"Nothing to claim: market {market_id}, account {account}", 422,
            ErrorKind.INVALID_STATE,
        )


# --- 5xxx: Collateral ---

class TransferFailedError(AppError):
    def __init__(self, direction: str, account: str, amount: int) -> None:
        super().__init__(
            5001,
            f"Collateral {direction} failed: account {account}, amount {amount}",
            502,
            ErrorKind.EXTERNAL_FAILURE,
        )


# --- 6xxx: Liquidity ---

class EmptyPoolError(AppError):
    def __init__(self, market_id: int) -> None:
        super().__init__(
            6002,
            f"Liquidity pool for market {market_id} has outstanding shares but no collateral",
            409,
            ErrorKind.INVALID_STATE,
        )


# --- 9xxx: System ---

class RateLimitError(AppError):
    def __init__(self) -> None:
        super().__init__(9001, "Rate limit exceeded", 429)


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
