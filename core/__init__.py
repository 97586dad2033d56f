"""
Core Package
============

Shared building blocks with no dependencies on the other layers.

Modules:
- models.py: Validation results, summaries, conversion options and results
- settings.py: Paths and defaults
- errors.py: Service layer exceptions
- github_actions.py: GitHub Actions workflow vocabulary
"""
