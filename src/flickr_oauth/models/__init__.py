"""Request and response models for Flickr API wrappers."""

from .upload import ReplaceResponse, UploadParams, UploadResponse

__all__ = ["ReplaceResponse", "UploadParams", "UploadResponse"]
