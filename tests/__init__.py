"""
Test suite for the seismic_gallery application.

This module contains all test cases for the application:
- Unit tests for models, services, workflows and UI handlers
- Integration tests for the upload, listing and deletion flows
"""
