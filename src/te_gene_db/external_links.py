"""Request URLs for external analysis services."""

from enum import Enum
from typing import Callable, Optional
from urllib.parse import quote

import click

from .error_handler import InvalidInput
from .logging_config import get_logger

logger = get_logger('external_links')

# Characters JavaScript's encodeURIComponent leaves alone
_SAFE_CHARS = "-_.!~*'()"


class ExternalService(Enum):
    """Third-party services reachable from the tool panels."""
    BLAST = "blast"
    KEGG = "kegg"
    UNIPROT = "uniprot"
    CHEMBL = "chembl"


URL_TEMPLATES = {
    ExternalService.BLAST: "https://blast.ncbi.nlm.nih.gov/Blast.cgi?CMD=Put&QUERY={query}&DATABASE=nr&PROGRAM=blastn",
    ExternalService.KEGG: "https://www.genome.jp/dbget-bin/www_bget?{query}",
    ExternalService.UNIPROT: "https://www.uniprot.org/uniprotkb?query={query}",
    ExternalService.CHEMBL: "https://www.ebi.ac.uk/chembl/g/#search_results/all/query={query}",
}

EMPTY_INPUT_MESSAGES = {
    ExternalService.BLAST: "Please enter a sequence.",
    ExternalService.KEGG: "Please enter a KEGG ID.",
    ExternalService.UNIPROT: "Please enter a UniProt ID or protein name.",
    ExternalService.CHEMBL: "Please enter a ChEMBL ID or compound name.",
}


def encode_component(text: str) -> str:
    """Percent-encode text for use inside a query string."""
    return quote(text, safe=_SAFE_CHARS)


def build_url(service: ExternalService, text: Optional[str]) -> str:
    """
    Build the request URL for a service from user-supplied text.

    Raises:
        InvalidInput: If the text is empty after trimming
    """
    value = (text or '').strip()
    if not value:
        raise InvalidInput(EMPTY_INPUT_MESSAGES[service])
    return URL_TEMPLATES[service].format(query=encode_component(value))


def blast_url(sequence: str) -> str:
    return build_url(ExternalService.BLAST, sequence)


def kegg_url(kegg_id: str) -> str:
    return build_url(ExternalService.KEGG, kegg_id)


def uniprot_url(query: str) -> str:
    return build_url(ExternalService.UNIPROT, query)


def chembl_url(query: str) -> str:
    return build_url(ExternalService.CHEMBL, query)


def open_externally(url: str, launcher: Callable[[str], int] = click.launch) -> int:
    """Hand a URL to the host environment (default browser)."""
    logger.info(f"Opening {url}")
    return launcher(url)
