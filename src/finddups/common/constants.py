"""Constants used throughout the application."""

# Content comparison
DEFAULT_CHUNK_SIZE = 1024  # bytes read per file per comparison step

# Reporting
GROUP_HEADER = "duplicates of size {size}"

# Process exit codes
EXIT_IO_ERROR = 1
EXIT_OUT_OF_MEMORY = 2
