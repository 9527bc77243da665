"""Finding models and redaction."""

from keyleak.findings.models import Finding, ScanResult
from keyleak.findings.redactor import STDIN_LABEL, display_path, redact

__all__ = ["Finding", "STDIN_LABEL", "ScanResult", "display_path", "redact"]
