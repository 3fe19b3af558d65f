"""
DFNS-CGGMP21 blueprint SDK (Python)

Operator identity, blueprint hook defaults and deterministic job hashing
for the threshold-ECDSA service. All operations are local.
"""

from .core import (
    KEYGEN_JOB_ID,
    KEY_REFRESH_JOB_ID,
    SIGN_JOB_ID,
    keccak256,
    sha256,
    canonicalize_json,
    derive_operator_address,
    operator_address_hex,
    generate_keypair,
    public_key_from_private,
    decompress_public_key,
    compute_deterministic_hashes,
    key_refresh_execution_hash,
    signing_execution_hash,
    store_key,
)
from .blueprint import (
    HookContext,
    BlueprintServiceManager,
    DfnsBlueprint,
    OperatorBlueprint,
)
from .config import BlueprintConfig, configure_logging, load_env
from .context import DfnsContext, raw_operator_key
from .store import DfnsStore, LocalDatabase
from .exceptions import (
    BlueprintError,
    ConfigError,
    ContextError,
    KeyFormatError,
    StoreError,
)

__all__ = [
    "KEYGEN_JOB_ID",
    "KEY_REFRESH_JOB_ID",
    "SIGN_JOB_ID",
    "keccak256",
    "sha256",
    "canonicalize_json",
    "derive_operator_address",
    "operator_address_hex",
    "generate_keypair",
    "public_key_from_private",
    "decompress_public_key",
    "compute_deterministic_hashes",
    "key_refresh_execution_hash",
    "signing_execution_hash",
    "store_key",
    "HookContext",
    "BlueprintServiceManager",
    "DfnsBlueprint",
    "OperatorBlueprint",
    "BlueprintConfig",
    "configure_logging",
    "load_env",
    "DfnsContext",
    "raw_operator_key",
    "DfnsStore",
    "LocalDatabase",
    "BlueprintError",
    "ConfigError",
    "ContextError",
    "KeyFormatError",
    "StoreError",
]
