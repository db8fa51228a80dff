"""Test suite for slide_transitions.

This package contains all automated tests for slide_transitions, organized to
mirror the source code structure.

Running Tests:
    pytest                                  # Run all tests
    pytest -v                               # Verbose output
    pytest tests/test_cli.py                # Run specific file
    pytest -s                               # Don't capture output (for debugging)
    pytest -k "idempotent"                  # Run tests with matching pattern in function name

Coverage:
    pytest --cov=slide_transitions --cov-report=html
    # Then open htmlcov/index.html

Notes:
    - Decks are built on the fly with python-pptx (see conftest.py); there are no
      binary fixtures checked in.
    - Hand-built archives (tests/helpers.py) cover the malformed cases python-pptx
      won't produce.
    - Nothing writes to the real ~/Documents: conftest.py points the user dirs at tmp_path.
"""
