"""Image Optimization Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless on-demand image resizing using AWS Lambda, CloudFront and S3"
)

__all__ = ["handlers", "core"]
