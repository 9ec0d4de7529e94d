from enum import Enum


class FailureKind(Enum):
    network = "network"
    not_found = "not-found"
    malformed_response = "malformed-response"


class RecipeViewerError(Exception):
    kind: FailureKind


class ProviderUnavailable(RecipeViewerError):
    """Transport failure, non-success status or an unreadable body."""

    kind = FailureKind.network


class RecipeNotFound(RecipeViewerError):
    """Well formed response with no matching meals."""

    kind = FailureKind.not_found


class MalformedResponse(RecipeViewerError):
    """Successful response that does not have the expected shape."""

    kind = FailureKind.malformed_response
