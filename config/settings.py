"""
ImageKit media client configuration.
"""
import os

# Service settings
SERVICE_NAME = "imagekit-media-client"
SERVICE_VERSION = "1.0.0"

# URL generation
IMAGEKIT_URL_ENDPOINT = os.getenv("IMAGEKIT_URL_ENDPOINT", "")
IMAGEKIT_PUBLIC_KEY = os.getenv("IMAGEKIT_PUBLIC_KEY", "")
IMAGEKIT_TRANSFORMATION_POSITION = os.getenv("IMAGEKIT_TRANSFORMATION_POSITION", "path")

# Overlays may nest transformations which may nest overlays again
MAX_TRANSFORMATION_DEPTH = int(os.getenv("IMAGEKIT_MAX_TRANSFORMATION_DEPTH", 32))

# Upload settings
UPLOAD_ENDPOINT = os.getenv("IMAGEKIT_UPLOAD_ENDPOINT", "https://upload.imagekit.io/api/v1/files/upload")
UPLOAD_TIMEOUT = float(os.getenv("IMAGEKIT_UPLOAD_TIMEOUT", 60.0))

# Responsive images
DEFAULT_DEVICE_BREAKPOINTS = [640, 750, 828, 1080, 1200, 1920, 2048, 3840]
DEFAULT_IMAGE_BREAKPOINTS = [16, 32, 48, 64, 96, 128, 256, 384]
