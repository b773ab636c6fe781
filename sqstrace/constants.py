"""
This module contains constants used across sqstrace.

Constants that should NOT be referenced by sqstrace users are marked with a leading underscore.
"""

# Use this to explicitly inform the backend that a trace should be rejected and not stored.
USER_REJECT = -1
# Used when the upstream producer decided the trace should be rejected and not stored.
AUTO_REJECT = 0
# Used when the upstream producer decided the trace should be kept and stored.
AUTO_KEEP = 1
# Use this to explicitly inform the backend that a trace should be kept and stored.
USER_KEEP = 2
