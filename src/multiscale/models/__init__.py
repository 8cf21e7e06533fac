"""数据模型包。"""

from .batch_job import BatchJob, SourceImage
from .constants import (
    SOURCE_EXTENSIONS,
    CollisionPolicy,
    CustomSizeDefaults,
    DensityMultiplier,
    DeviceCatalog,
    OutputFormat,
)
from .profiles import CustomProfile, NamedProfile, TargetProfile, profile_from_selection
from .results import (
    Archive,
    BatchResult,
    BatchStatus,
    ImageFailure,
    ImageOutcome,
    OutputEntry,
    RasterBuffer,
    ResolvedSize,
)


__all__ = [
    "Archive",
    "SOURCE_EXTENSIONS",
    "BatchJob",
    "BatchResult",
    "BatchStatus",
    "CollisionPolicy",
    "CustomProfile",
    "CustomSizeDefaults",
    "DensityMultiplier",
    "DeviceCatalog",
    "ImageFailure",
    "ImageOutcome",
    "NamedProfile",
    "OutputEntry",
    "OutputFormat",
    "RasterBuffer",
    "ResolvedSize",
    "SourceImage",
    "TargetProfile",
    "profile_from_selection",
]
