"""
Keysmith -- Password and Passphrase Generation Engine
======================================================

Generates passwords under five schemes (strong, base64, memorable,
quantum-resistant, pronounceable) and reports the entropy of each
result. All randomness comes from an injected
:class:`~keysmith.core.ports.RandomSource`, so identical configuration
and identical draws give identical passwords in every front end.

Modules:
    - keysmith.core.service: The facade every front end calls
    - keysmith.core.engine: Strategy dispatch
    - keysmith.core.models: Pydantic data models
    - keysmith.domain: Validation rules and the entropy model
    - keysmith.generators: One strategy per password type
    - keysmith.adapters: Random sources and word list files
    - keysmith.analyzers: Randomness audit and password strength scoring
    - keysmith.output: Console and JSON output
    - keysmith.cli: Click-based command-line interface

References:
    - Shannon, C. E. (1948). A Mathematical Theory of Communication.
    - NIST SP 800-63B (2017). Digital Identity Guidelines.
"""

__version__ = "1.0.0"
__tool_name__ = "keysmith"

from keysmith.core.models import PasswordConfig, PasswordType  # noqa: E402
from keysmith.core.service import PasswordService  # noqa: E402

__all__ = ["PasswordConfig", "PasswordService", "PasswordType", "__version__"]
