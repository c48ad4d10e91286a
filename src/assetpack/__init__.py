"""Asset pack archive tools.

The public surface lives in :mod:`assetpack.api`.
"""

__version__ = "0.1.0"
