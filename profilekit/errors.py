"""Exceptions raised by profilekit."""


class ProfileError(Exception):
    """Base class for all profilekit failures."""


class ConfigError(ProfileError):
    """The profile location or configuration is unusable."""


class MetadataError(ProfileError):
    """The profile metadata file exists but cannot be parsed."""


class DiscoveryError(ProfileError):
    """A control definition file exists but cannot be parsed."""


class ArchiveError(ProfileError):
    """Writing the profile archive failed."""
