class SynkrosError(Exception):
    """Base class for catalog sync errors."""


class SourceUnavailableError(SynkrosError):
    """The authoritative catalog database cannot be reached."""


class AssetUploadError(SynkrosError):
    """The ingestion service did not return an asset id for an upload."""
