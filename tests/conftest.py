"""Shared fixtures: sample workflow XML, stylesheets and schemas."""

from pathlib import Path

import pytest

from core.settings import DEFAULT_XSD_SCHEMA_FILE, DEFAULT_XSLT_FILE

SIMPLE_WORKFLOW_XML = """<?xml version="1.0" encoding="utf-8"?>
<workflow>
  <name>Test Workflow</name>
  <on>
    <push>
      <branches>main</branches>
    </push>
  </on>
  <jobs>
    <build>
      <runs-on>ubuntu-latest</runs-on>
      <steps>
        <step>
          <uses>actions/checkout@v3</uses>
        </step>
        <step>
          <name>Build</name>
          <run>echo Building...</run>
        </step>
      </steps>
    </build>
  </jobs>
</workflow>
"""

SIMPLE_XSLT = """<?xml version="1.0" encoding="UTF-8"?>
<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="text" indent="no" />

  <xsl:template match="/workflow">
    <xsl:text>name: </xsl:text>
    <xsl:value-of select="name" />
    <xsl:text>&#xa;</xsl:text>
    <xsl:text>on:&#xa;</xsl:text>
    <xsl:apply-templates select="on" />
    <xsl:text>jobs:&#xa;</xsl:text>
    <xsl:apply-templates select="jobs" />
  </xsl:template>

  <xsl:template match="on">
    <xsl:apply-templates select="push" />
  </xsl:template>

  <xsl:template match="push">
    <xsl:text>  push:&#xa;</xsl:text>
    <xsl:text>    branches: [ </xsl:text>
    <xsl:value-of select="branches" />
    <xsl:text> ]&#xa;</xsl:text>
  </xsl:template>

  <xsl:template match="jobs">
    <xsl:apply-templates select="build" />
  </xsl:template>

  <xsl:template match="build">
    <xsl:text>  build:&#xa;</xsl:text>
    <xsl:text>    runs-on: </xsl:text>
    <xsl:value-of select="runs-on" />
    <xsl:text>&#xa;</xsl:text>
    <xsl:text>    steps:&#xa;</xsl:text>
    <xsl:apply-templates select="steps/step" />
  </xsl:template>

  <xsl:template match="step">
    <xsl:text>      - </xsl:text>
    <xsl:if test="uses">
      <xsl:text>uses: </xsl:text>
      <xsl:value-of select="uses" />
      <xsl:text>&#xa;</xsl:text>
    </xsl:if>
    <xsl:if test="name">
      <xsl:text>name: </xsl:text>
      <xsl:value-of select="name" />
      <xsl:text>&#xa;</xsl:text>
    </xsl:if>
    <xsl:if test="run">
      <xsl:text>        run: </xsl:text>
      <xsl:value-of select="run" />
      <xsl:text>&#xa;</xsl:text>
    </xsl:if>
  </xsl:template>
</xsl:stylesheet>
"""

# Emits a mapping key followed by a sequence item at the same level
BROKEN_YAML_XSLT = """<?xml version="1.0" encoding="UTF-8"?>
<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">
  <xsl:output method="text" />
  <xsl:template match="/">
    <xsl:text>name: broken&#xa;- item&#xa;</xsl:text>
  </xsl:template>
</xsl:stylesheet>
"""

SIMPLE_XSD = """<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema" elementFormDefault="qualified">
  <xs:element name="workflow">
    <xs:complexType>
      <xs:sequence>
        <xs:element name="name" type="xs:string"/>
        <xs:element name="on" type="xs:anyType"/>
        <xs:element name="jobs" type="xs:anyType"/>
      </xs:sequence>
    </xs:complexType>
  </xs:element>
</xs:schema>
"""

BUNDLED_WORKFLOW_XML = """<?xml version="1.0" encoding="utf-8"?>
<workflow>
  <name>CI</name>
  <on>
    <push>
      <branches>
        <branch>main</branch>
        <branch>releases/**</branch>
      </branches>
    </push>
    <workflow_dispatch/>
  </on>
  <env>
    <var name="PYTHON_VERSION">3.12</var>
  </env>
  <jobs>
    <job id="lint">
      <runs-on>ubuntu-latest</runs-on>
      <steps>
        <step>
          <uses>actions/checkout@v4</uses>
        </step>
        <step>
          <name>Lint</name>
          <run>make lint</run>
        </step>
      </steps>
    </job>
    <job id="test">
      <name>Test suite</name>
      <needs>
        <job>lint</job>
      </needs>
      <runs-on>ubuntu-latest</runs-on>
      <steps>
        <step>
          <uses>actions/setup-python@v5</uses>
          <with>
            <param name="python-version">3.12</param>
          </with>
        </step>
        <step>
          <name>Run tests</name>
          <run>
            pip install -e .[test]
            pytest
          </run>
        </step>
      </steps>
    </job>
  </jobs>
</workflow>
"""

VALID_WORKFLOW_YAML = """name: CI

on:
  push:
    branches:
      - main

jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - uses: actions/checkout@v4
      - name: Test
        run: make test
"""


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def simple_xml(tmp_path):
    """Workflow XML in the layout SIMPLE_XSLT expects."""
    return _write(tmp_path / "workflow.xml", SIMPLE_WORKFLOW_XML)


@pytest.fixture
def simple_xslt(tmp_path):
    return _write(tmp_path / "test-transform.xslt", SIMPLE_XSLT)


@pytest.fixture
def broken_yaml_xslt(tmp_path):
    return _write(tmp_path / "broken.xslt", BROKEN_YAML_XSLT)


@pytest.fixture
def simple_xsd(tmp_path):
    return _write(tmp_path / "schema.xsd", SIMPLE_XSD)


@pytest.fixture
def bundled_xml(tmp_path):
    """Workflow XML in the layout of the bundled schema."""
    return _write(tmp_path / "ci.xml", BUNDLED_WORKFLOW_XML)


@pytest.fixture
def bundled_xslt():
    return DEFAULT_XSLT_FILE


@pytest.fixture
def bundled_xsd():
    return DEFAULT_XSD_SCHEMA_FILE


@pytest.fixture
def valid_yaml(tmp_path):
    return _write(tmp_path / "ci.yml", VALID_WORKFLOW_YAML)
