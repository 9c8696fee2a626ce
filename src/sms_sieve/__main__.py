# =============================================================================
# SMS Sieve Entry Point for `python -m sms_sieve`
# =============================================================================
# This module allows SMS Sieve to be run as a Python module:
#
#   python -m sms_sieve
#
# This is equivalent to running the 'sms-sieve' command after installation.
# =============================================================================

import sys

from sms_sieve.cli import main

if __name__ == "__main__":
    sys.exit(main())
