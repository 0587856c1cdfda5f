"""Fixtures compartidas: construyen tablas a partir de HTML mediante el adaptador de bs4."""

from typing import List, Optional

import pytest

from html_table_extractor.config import ExtractionOptions
from html_table_extractor.grid_builder import GridBuilder
from html_table_extractor.parser import parse_html_document
from html_table_extractor.structures import Table


def extract(html: str, options: Optional[ExtractionOptions] = None) -> List[Table]:
    _, root = parse_html_document(html)
    return GridBuilder(options).extract_tables(root)


@pytest.fixture
def tables_from():
    return extract
