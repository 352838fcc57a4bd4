from .image import ResizedImage, SizeSpec, UploadedFile
from .report import MediaResult, PublishReport

__all__ = [
    "ResizedImage",
    "SizeSpec",
    "UploadedFile",
    "MediaResult",
    "PublishReport",
]
