"""
Common pipeline environment (CPE).

The CPE is a directory tree under <env_root_path>/commonPipelineEnvironment
in which every file is one value: the key is the file's relative path, and
files ending in .json hold JSON values. It can be exported as JSON, or
encrypted for transport through orchestrators that expose step output.
"""

from __future__ import annotations

import base64
import hashlib
import json
import os
from pathlib import Path
from typing import Any, Dict, Union

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from cienv.exceptions import PipelineEnvError
from cienv.protocols import Orchestrator
from cienv.utils.logger import logger

CPE_DIR_NAME = "commonPipelineEnvironment"
AES_BLOCK_SIZE = 16


def load_cpe(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load the CPE from disk.

    Args:
        path: The commonPipelineEnvironment directory

    Returns:
        Mapping of key to value; empty if the directory does not exist

    Raises:
        PipelineEnvError: If a file cannot be read or holds invalid JSON
    """
    root = Path(path)
    if not root.is_dir():
        logger.debug(f"No pipeline environment at {root}")
        return {}

    cpe: Dict[str, Any] = {}
    for file_path in sorted(p for p in root.rglob("*") if p.is_file()):
        key = file_path.relative_to(root).as_posix()
        try:
            content = file_path.read_text(encoding="utf-8")
            if key.endswith(".json"):
                cpe[key[: -len(".json")]] = json.loads(content) if content.strip() else None
            else:
                cpe[key] = content
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise PipelineEnvError(f"Failed to read pipeline environment value '{key}': {e}") from e
    return cpe


def _cipher(secret: bytes, iv: bytes) -> Cipher:
    key = hashlib.sha256(secret).digest()
    return Cipher(algorithms.AES(key), modes.CFB(iv))


def encrypt(secret: bytes, data: bytes) -> bytes:
    """
    Encrypt data with AES-256-CFB.

    The key is the SHA-256 digest of secret. The random IV is prepended to
    the ciphertext and the result is base64 encoded.
    """
    if not secret:
        raise PipelineEnvError("Encryption secret must not be empty")
    iv = os.urandom(AES_BLOCK_SIZE)
    encryptor = _cipher(secret, iv).encryptor()
    cipher_text = encryptor.update(data) + encryptor.finalize()
    return base64.b64encode(iv + cipher_text)


def decrypt(secret: bytes, encoded: bytes) -> bytes:
    """Inverse of encrypt()."""
    try:
        raw = base64.b64decode(encoded, validate=True)
    except ValueError as e:
        raise PipelineEnvError(f"Encrypted payload is not valid base64: {e}") from e
    if len(raw) < AES_BLOCK_SIZE:
        raise PipelineEnvError("Encrypted payload is shorter than the IV")
    decryptor = _cipher(secret, raw[:AES_BLOCK_SIZE]).decryptor()
    return decryptor.update(raw[AES_BLOCK_SIZE:]) + decryptor.finalize()


def read_pipeline_env(
    env_root_path: Union[str, Path],
    secret: str = "",
    orchestrator: Orchestrator = Orchestrator.UNKNOWN,
) -> bytes:
    """
    Export the CPE.

    Jenkins keeps the CPE in its own workspace, so it is never encrypted
    there; everywhere else a non-empty secret turns on encryption.

    Returns:
        Encrypted payload, or tab-indented JSON followed by a newline
    """
    cpe = load_cpe(Path(env_root_path) / CPE_DIR_NAME)

    if secret and orchestrator is not Orchestrator.JENKINS:
        logger.debug("Found pipeline environment secret, encrypting CPE")
        return encrypt(secret.encode("utf-8"), json.dumps(cpe).encode("utf-8"))

    return (json.dumps(cpe, indent="\t") + "\n").encode("utf-8")
