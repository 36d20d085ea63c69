"""Tissue-Engineering Alzheimer's Gene Database.

Search, page through and export a catalog of Alzheimer's-related gene
records, and run small nucleotide sequence utilities (complement,
transcription, translation, primer design).
"""

__version__ = "1.0.0"
__author__ = "Austin P. Morrissey"
