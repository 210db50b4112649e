"""
Configuration settings for the drivefs in-memory filesystem.
"""
import os

# Path settings
PATH_SEPARATOR = "\\"
DEFAULT_DRIVE_NAME = "drive"

# Zip archives report their content size divided by this ratio
ZIP_COMPRESSION_RATIO = 2

# Logging settings
LOG_LEVEL = os.environ.get("DRIVEFS_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
