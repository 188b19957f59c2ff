#!/usr/bin/env python
"""
Run tests for the LTI Dynamic Registration app
"""

import os
import sys

if __name__ == '__main__':
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'test_settings')

    try:
        from django.core.management import execute_from_command_line  # pylint: disable=wrong-import-position
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc

    arguments = sys.argv[1:]
    options = [argument for argument in arguments if argument.startswith('-')]
    paths = [argument for argument in arguments if argument not in options]
    execute_from_command_line([sys.argv[0], 'test'] + paths + options)
