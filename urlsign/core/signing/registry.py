"""
Signing Key Registry

Maps key ids (the `keyid` URL parameter) to Ed25519 public keys for
verification. Loaded from YAML configuration.

Configuration format (config/keys.yaml):
```yaml
keys:
  cdn-2026:
    description: "CDN asset signing key"
    public_key: "base64-encoded-raw-public-key"
    enabled: true
```
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
import yaml

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PublicKey

from urlsign.core.paths import get_config_path
from urlsign.core.signing.keys import base64_to_public_key

logger = logging.getLogger(__name__)


@dataclass
class SigningKey:
    """
    A registered verification key.
    
    Attributes:
        key_id: Identifier carried in signed URLs
        public_key: Ed25519 public key
        description: Human-readable description
        enabled: Disabled keys are never returned for verification
    """
    key_id: str
    public_key: Ed25519PublicKey
    description: str = ""
    enabled: bool = True


class KeyRegistry:
    """
    Registry of verification keys by key id.
    
    Read-only after loading, so safe to share between threads.
    """
    
    def __init__(self):
        self._keys: Dict[str, SigningKey] = {}
        self._loaded = False
    
    def load_from_yaml(self, config_path: Path) -> None:
        """
        Load keys from a YAML file.
        
        A missing file is logged and leaves the registry empty.
        
        Raises:
            ValueError: If an entry is invalid
        """
        config_path = Path(config_path)
        
        if not config_path.exists():
            logger.warning(f"Keys config not found: {config_path}")
            self._loaded = True
            return
        
        with open(config_path) as f:
            config = yaml.safe_load(f) or {}
        
        for key_id, key_data in (config.get("keys") or {}).items():
            try:
                self.register(self._parse_key(str(key_id), key_data or {}))
            except (ValueError, TypeError) as e:
                logger.error(f"Failed to load key '{key_id}': {e}")
                raise ValueError(f"Invalid key config for '{key_id}': {e}") from e
        
        self._loaded = True
        logger.info(f"Loaded {len(self._keys)} signing keys from {config_path}")
    
    def _parse_key(self, key_id: str, data: dict) -> SigningKey:
        public_key_b64 = data.get("public_key")
        if not public_key_b64:
            raise ValueError("public_key is required")
        return SigningKey(
            key_id=key_id,
            public_key=base64_to_public_key(public_key_b64),
            description=data.get("description", ""),
            enabled=bool(data.get("enabled", True)),
        )
    
    def register(self, key: SigningKey) -> None:
        """Add or replace a key."""
        self._keys[key.key_id] = key
    
    def get_public_key(self, key_id: str) -> Optional[Ed25519PublicKey]:
        """
        Get the public key for a key id.
        
        Returns:
            Public key if registered and enabled, None otherwise
        """
        key = self._keys.get(key_id)
        if key and key.enabled:
            return key.public_key
        return None
    
    def list_keys(self) -> List[str]:
        """Get list of all registered key ids."""
        return list(self._keys.keys())
    
    @property
    def is_loaded(self) -> bool:
        """Check if registry has been loaded."""
        return self._loaded


def load_key_registry(config_path: Optional[Path] = None) -> KeyRegistry:
    """
    Load the verification key registry.

    Args:
        config_path: Path to keys.yaml. If None, uses get_config_path().

    Returns:
        A new registry (empty when no keys.yaml is found)
    """
    registry = KeyRegistry()
    if config_path is None:
        config_path = get_config_path("keys.yaml")
        if config_path is None:
            logger.info("No keys.yaml found - key registry is empty")
            return registry

    registry.load_from_yaml(config_path)
    return registry
