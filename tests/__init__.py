"""
themeforge test suite
=====================

Test Modules
------------
- test_models.py: Tests for the SetupConfig model and its enums
- test_commands.py: Tests for the subprocess wrapper
- test_prompts.py: Tests for the prompt backends
- test_wizard.py: Tests for the question sequence
- test_shopify.py: Tests for Shopify CLI access
- test_generator.py: Tests for the setup steps
- test_cli.py: Tests for the command-line interface

Running Tests
-------------
    # Run all tests
    pytest

    # Run specific module
    pytest tests/test_generator.py

    # Run specific test class
    pytest tests/test_models.py::TestSetupConfig
"""
