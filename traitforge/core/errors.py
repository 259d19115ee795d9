"""Exception hierarchy for traitforge."""


class TraitForgeError(Exception):
    """Base class for all traitforge errors."""


class ConfigError(TraitForgeError):
    """Configuration file is missing, unreadable or invalid."""


class CatalogError(TraitForgeError):
    """The trait catalog cannot be used as loaded."""


class EmptyCatalogError(CatalogError):
    """No layer in the trait catalog yielded any element."""


class RuleConfigError(TraitForgeError):
    """A rule table entry is malformed or points at an unknown trait."""


class MaxAttemptsExceeded(TraitForgeError):
    """The uniqueness search for one token ran out of attempts.

    Args:
        attempts: Number of selections drawn before giving up
        incompatible: How many of them broke an incompatibility rule
        duplicates: How many of them collided with an accepted fingerprint
    """

    def __init__(self, attempts: int, incompatible: int = 0, duplicates: int = 0) -> None:
        self.attempts = attempts
        self.incompatible = incompatible
        self.duplicates = duplicates
        super().__init__(
            f"no unique selection after {attempts} attempts "
            f"({incompatible} incompatible, {duplicates} duplicate)"
        )
