import os
import tempfile
import xml.etree.ElementTree as ET

# keep log files out of the working tree; must run before config_paths is imported
os.environ.setdefault("SITEMAP_LOG_DIR", tempfile.mkdtemp(prefix="sitemap-logs-"))

import pytest


@pytest.fixture
def parse_xml():
    def _parse(text: str) -> ET.Element:
        return ET.fromstring(text.encode("utf-8"))
    return _parse
