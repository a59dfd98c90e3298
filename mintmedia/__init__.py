"""
mintmedia - media resolution and preview playback for minted music tokens

- Resolves ipfs://, bare CID, ar:// and plain references to renderable URLs
- Direct fetch first (IPFS peers, Arweave API), public gateways as fallback
- Exclusive preview playback with fade envelopes and auto-stop
"""

__version__ = "0.3.0"
__author__ = "mintmedia Contributors"
__license__ = "MIT"

from mintmedia.config import get_config, load_config

__all__ = [
    "__version__",
    "get_config",
    "load_config",
]
