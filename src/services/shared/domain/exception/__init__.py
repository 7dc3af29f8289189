from .exceptions import (
    BusinessRuleViolationException,
    ConflictException,
    DomainException,
    DuplicateResourceException,
    OptimisticLockException,
    PartialFailureException,
    PersistenceException,
    PolicyViolationException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    UnrecoverableException,
)

__all__ = [
    "DomainException",
    "ResourceNotFoundException",
    "BusinessRuleViolationException",
    "ConflictException",
    "DuplicateResourceException",
    "OptimisticLockException",
    "PolicyViolationException",
    "ServiceUnavailableException",
    "PersistenceException",
    "PartialFailureException",
    "UnrecoverableException",
]
