"""pyartifacts - Async refresh, normalization and lookup of intel map artifacts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyartifacts")
except PackageNotFoundError:
    __version__ = "0+local"
from pyartifacts._api.artifacts import FetchFailure, FetchResult, FetchSuccess
from pyartifacts.client import ArtifactClient
from pyartifacts.config import ArtifactConfig
from pyartifacts.exceptions import (
    ArtifactConfigError,
    ArtifactError,
    ArtifactTransportError,
)
from pyartifacts.hooks import Hooks
from pyartifacts.idle import IdleMonitor, IdleSource
from pyartifacts.ingestion.scheduler import RefreshScheduler
from pyartifacts.models import (
    ArtifactSnapshot,
    EntityRecord,
    KindDetail,
    LocationFact,
)
from pyartifacts.state.events import ArtifactsUpdated
from pyartifacts.state.store import ArtifactStore

__all__ = [
    "__version__",
    "ArtifactClient",
    "ArtifactConfig",
    "ArtifactConfigError",
    "ArtifactError",
    "ArtifactSnapshot",
    "ArtifactStore",
    "ArtifactTransportError",
    "ArtifactsUpdated",
    "EntityRecord",
    "FetchFailure",
    "FetchResult",
    "FetchSuccess",
    "Hooks",
    "IdleMonitor",
    "IdleSource",
    "KindDetail",
    "LocationFact",
    "RefreshScheduler",
]
