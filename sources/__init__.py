# Importing the built-in sources registers them
from . import file_seed, http_seed  # noqa: F401
