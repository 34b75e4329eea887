"""
melonhatch test suite
=====================

Test Modules
------------
- test_versioning.py: Version parsing and comparison
- test_fileversion.py: PE file version reader
- test_models.py: Pydantic models
- test_inspector.py: Game installation introspection
- test_references.py: Reference resolution and rendering
- test_templater.py: Placeholder substitution and template copy
- test_generator.py: End-to-end project generation
- test_config.py: Settings loading
- test_editor.py: Editor launching
- test_cli.py: Command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_references.py

    # Run specific test class
    pytest tests/test_references.py::TestFrameworkTiers
"""
