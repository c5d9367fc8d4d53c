"""Allow running as: python -m cpmsched"""
import sys

from .cli import main

sys.exit(main())
