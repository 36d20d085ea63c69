"""Nucleotide sequence utilities: complement, transcription, translation, primers."""

import logging
import math
import re
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

from Bio.Data import CodonTable

from .error_handler import InvalidInput
from .models import Primer, PrimerPair

logger = logging.getLogger(__name__)

DEFAULT_PRIMER_LENGTH = 20
DEFAULT_CHUNK_SIZE = 10

STOP_SYMBOL = '*'
UNKNOWN_RESIDUE = 'X'
UNKNOWN_BASE = 'N'

COMPLEMENT_TABLE: Mapping[str, str] = MappingProxyType({
    'A': 'T',
    'T': 'A',
    'U': 'A',
    'C': 'G',
    'G': 'C',
})


def _build_codon_table() -> Mapping[str, str]:
    """RNA codon -> one-letter residue for the standard genetic code."""
    standard = CodonTable.unambiguous_rna_by_id[1]
    table = dict(standard.forward_table)
    for codon in standard.stop_codons:
        table[codon] = STOP_SYMBOL
    if len(table) != 64:
        raise RuntimeError(f"Standard codon table has {len(table)} entries, expected 64")
    return MappingProxyType(table)


CODON_TABLE: Mapping[str, str] = _build_codon_table()

_WHITESPACE = re.compile(r'\s+')


def clean_sequence(raw: Optional[str]) -> str:
    """Trim, upper-case and strip all whitespace from user input."""
    if raw is None:
        return ''
    return _WHITESPACE.sub('', raw.strip().upper())


def require_sequence(raw: Optional[str]) -> str:
    """Clean the input and reject it if nothing is left.

    Raises:
        InvalidInput: If the cleaned sequence is empty
    """
    seq = clean_sequence(raw)
    if not seq:
        raise InvalidInput("Please enter a DNA sequence.")
    return seq


def complement(seq: str) -> str:
    """Complement each base; symbols outside A/T/U/C/G become N."""
    return ''.join(COMPLEMENT_TABLE.get(base, UNKNOWN_BASE) for base in seq)


def reverse_complement(seq: str) -> str:
    """Complement read end-to-end in reverse (the opposite strand)."""
    return complement(seq)[::-1]


def transcribe(seq: str) -> str:
    """DNA -> RNA: every T becomes U."""
    return seq.replace('T', 'U')


def translate(seq: str) -> str:
    """
    Translate a nucleotide sequence into one-letter residues.

    Input containing T is transcribed first; input without T is taken to
    be RNA already and used as-is. Codons are read from position 0 in
    non-overlapping triplets and a trailing partial codon is ignored.
    Stop codons give ``*`` and unrecognised triplets give ``X``.

    Args:
        seq: Cleaned DNA or RNA sequence

    Returns:
        Protein sequence, one residue per complete codon
    """
    rna = transcribe(seq) if 'T' in seq else seq
    return ''.join(
        CODON_TABLE.get(rna[i:i + 3], UNKNOWN_RESIDUE)
        for i in range(0, len(rna) - 2, 3)
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def gc_percent(seq: str) -> int:
    """Percentage of G and C bases, rounded; 0 for an empty sequence."""
    if not seq:
        return 0
    gc = seq.count('G') + seq.count('C')
    return _round_half_up(100 * gc / len(seq))


def melting_temp_c(primer: str) -> int:
    """Wallace-rule melting temperature: 2 x (A+T) + 4 x (G+C).

    Only meaningful for short primers (roughly 15-25 bases).
    """
    at = primer.count('A') + primer.count('T')
    gc = primer.count('G') + primer.count('C')
    return _round_half_up(2 * at + 4 * gc)


def make_primer(seq: str) -> Primer:
    return Primer(
        sequence=seq,
        length_bp=len(seq),
        gc_percent=gc_percent(seq),
        melting_temp_c=melting_temp_c(seq),
    )


def design_primers(seq: str, primer_length: int = DEFAULT_PRIMER_LENGTH) -> PrimerPair:
    """
    Design a forward/reverse primer pair at the ends of a target.

    The forward primer is the first ``primer_length`` bases; the reverse
    primer is the reverse complement of the last ``primer_length`` bases.

    Args:
        seq: Cleaned target DNA sequence
        primer_length: Length of each primer in bases

    Returns:
        PrimerPair with GC content and melting temperature of each primer

    Raises:
        InvalidInput: If the primer length is not positive or the target
            is shorter than twice the primer length
    """
    if primer_length <= 0:
        raise InvalidInput(f"Primer length must be positive, got {primer_length}")

    min_length = 2 * primer_length
    if len(seq) < min_length:
        raise InvalidInput(
            f"Sequence should be at least {min_length} bases for primer design "
            f"(got {len(seq)})."
        )

    forward = seq[:primer_length]
    reverse = reverse_complement(seq[-primer_length:])
    logger.debug(f"Designed primers for {len(seq)} bp target: {forward} / {reverse}")
    return PrimerPair(forward=make_primer(forward), reverse=make_primer(reverse))


class SequenceChunks:
    """Restartable iterable of fixed-size substrings of a sequence."""

    def __init__(self, seq: str, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise InvalidInput(f"Chunk size must be positive, got {chunk_size}")
        self.seq = seq
        self.chunk_size = chunk_size

    def __iter__(self) -> Iterator[str]:
        for i in range(0, len(self.seq), self.chunk_size):
            yield self.seq[i:i + self.chunk_size]

    def __len__(self) -> int:
        return math.ceil(len(self.seq) / self.chunk_size)


def format_in_chunks(seq: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> SequenceChunks:
    """Group a sequence into ``chunk_size`` pieces for display."""
    return SequenceChunks(seq, chunk_size)


def format_sequence(seq: str, chunk_size: int = DEFAULT_CHUNK_SIZE) -> str:
    """Space-separated chunks, e.g. ``ATGCATGCAT GCAT``."""
    return ' '.join(format_in_chunks(seq, chunk_size))
