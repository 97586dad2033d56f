"""
Validators Package
==================

This package contains all validation logic:
- XML syntax and XSD schema validation
- YAML syntax validation
- GitHub Actions workflow structure checks

Modules:
- validation_pipeline.py: Async pipeline base class
- xml_validator.py: XML and XSD checks
- yaml_validator.py: YAML syntax checks
- github_actions_validator.py: Workflow structure checks
"""

from .validation_pipeline import AsyncValidationPipeline, collect
from .xml_validator import XmlValidator, validate_xml, validate_xml_content
from .yaml_validator import YamlValidator, validate_yaml, validate_yaml_content
from .github_actions_validator import GitHubActionsValidator, validate_workflow_content

__all__ = [
    'AsyncValidationPipeline',
    'collect',
    'XmlValidator',
    'YamlValidator',
    'GitHubActionsValidator',
    'validate_xml',
    'validate_xml_content',
    'validate_yaml',
    'validate_yaml_content',
    'validate_workflow_content',
]
