class DomainException(Exception):
    """ドメイン層で発生する基底例外

    error_code はハンドラーがエラーレスポンスに載せる識別子。
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str = "", details: list | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class ResourceNotFoundException(DomainException):
    """リソースが見つからない場合"""

    error_code = "NOT_FOUND"


class BusinessRuleViolationException(DomainException):
    """ビジネスルールに違反した場合"""

    error_code = "BUSINESS_RULE_VIOLATION"


class ConflictException(DomainException):
    """リソースの状態が要求と競合する場合"""

    error_code = "CONFLICT"


class DuplicateResourceException(ConflictException):
    """リソースの重複エラー（条件付き書き込みの失敗時）"""

    error_code = "DUPLICATE_RESOURCE"


class OptimisticLockException(ConflictException):
    """楽観ロックの競合エラー（ステータスが期待値と異なる場合）"""

    error_code = "OPTIMISTIC_LOCK_CONFLICT"


class PolicyViolationException(DomainException):
    """業務ポリシー（期限など）に違反した場合"""

    error_code = "POLICY_VIOLATION"


class ServiceUnavailableException(DomainException):
    """下流サービスが利用できない場合（サーキットオープン・リトライ枯渇）"""

    error_code = "SERVICE_UNAVAILABLE"


class PersistenceException(DomainException):
    """ローカル永続化に失敗した場合"""

    error_code = "PERSISTENCE_FAILED"


class PartialFailureException(DomainException):
    """ローカル更新はコミット済みだが、リモートの補償呼び出しが失敗した場合"""

    error_code = "PARTIAL_FAILURE"


class UnrecoverableException(DomainException):
    """ローカル永続化と補償の両方が失敗し、整合性が不定になった場合"""

    error_code = "UNRECOVERABLE"
