"""Tests for input parsing module."""

import pytest

from genome_analyzer.exceptions import DecodeError
from genome_analyzer.input_parser import (
    CANONICAL_ALPHABET, FastaParser, GenBankParser, InputParser, RawParser,
    PARSERS, detect_dialect, normalize_alphabet
)
from genome_analyzer.models import Dialect, GenomeFile


GENBANK_TWO_RECORDS = """LOCUS       TEST01                    20 bp    DNA     linear   SYN 01-JAN-2024
DEFINITION  Synthetic test construct.
ACCESSION   TEST01
ORGANISM  Escherichia coli
FEATURES             Location/Qualifiers
     source          1..20
ORIGIN
        1 acgtacgtac gtacgtacgt
//
LOCUS       TEST02                    10 bp    DNA     linear   SYN 01-JAN-2024
DEFINITION  Second record.
ORGANISM  Homo sapiens
ORIGIN
        1 gggggggggg
//
"""


class TestNormalizeAlphabet:
    """Test cases for alphabet normalization."""

    def test_keeps_canonical_symbols_uppercased(self):
        """Test lowercase input is uppercased."""
        assert normalize_alphabet("acgtn") == "ACGTN"

    def test_drops_everything_else(self):
        """Test digits, whitespace, gaps and ambiguity codes are dropped."""
        assert normalize_alphabet("A-C.G T\nU 12 N R Y *") == "ACGTN"

    def test_empty_input(self):
        """Test empty input gives empty output."""
        assert normalize_alphabet("") == ""

    def test_output_alphabet(self):
        """Test output only contains canonical symbols."""
        text = "The quick brown fox jumps over the lazy dog 0123456789 ~!@#"
        assert set(normalize_alphabet(text)) <= CANONICAL_ALPHABET

    def test_canonical_alphabet(self):
        """Test canonical alphabet is exactly ACGTN."""
        assert CANONICAL_ALPHABET == frozenset("ACGTN")


class TestDetectDialect:
    """Test cases for dialect detection."""

    @pytest.mark.parametrize("filename", [
        "genome.fasta", "genome.fa", "genome.fas", "genome.fna", "GENOME.FASTA", "a.gbk.fa"
    ])
    def test_fasta_extensions(self, filename):
        assert detect_dialect(filename) == Dialect.FASTA

    @pytest.mark.parametrize("filename", ["plasmid.gb", "plasmid.gbk", "Plasmid.GBK"])
    def test_genbank_extensions(self, filename):
        assert detect_dialect(filename) == Dialect.GENBANK

    @pytest.mark.parametrize("filename", ["reads.txt", "noextension", "archive.fasta.gz", "genome.embl", ""])
    def test_everything_else_is_raw(self, filename):
        assert detect_dialect(filename) == Dialect.RAW

    def test_every_dialect_has_a_parser(self):
        """Test the parser registry covers every dialect."""
        assert set(PARSERS) == set(Dialect)


class TestFastaParser:
    """Test cases for FASTA parsing."""

    @pytest.fixture
    def parser(self):
        return FastaParser()

    def test_single_record(self, parser):
        """Test header and wrapped sequence lines."""
        parsed = parser.parse(">Escherichia coli\nACGTACGTAC\nGGCC\n")

        assert parsed.sequence == "ACGTACGTACGGCC"
        assert parsed.metadata.organism == "Escherichia coli"
        assert parsed.metadata.definition is None

    def test_last_non_empty_header_wins(self, parser):
        """Test later headers overwrite earlier ones, blank headers do not."""
        parsed = parser.parse(">first\nACGT\n>second header\nACGTAC\n>   \nGG")

        assert parsed.metadata.organism == "second header"
        assert parsed.sequence == "ACGTACGTACGG"

    def test_lines_trimmed_and_normalized(self, parser):
        """Test whitespace, CRLF and non-nucleotide symbols are removed."""
        parsed = parser.parse(">x\r\n  acg t \r\n12 nn-ac\r\n")

        assert parsed.sequence == "ACGTNNAC"

    def test_no_header(self, parser):
        """Test sequence without any header line."""
        parsed = parser.parse("ACGTACGTACGT")

        assert parsed.sequence == "ACGTACGTACGT"
        assert parsed.metadata.organism is None

    def test_empty_text(self, parser):
        """Test empty file gives empty sequence without error."""
        parsed = parser.parse("")

        assert parsed.sequence == ""


class TestGenBankParser:
    """Test cases for GenBank parsing."""

    @pytest.fixture
    def parser(self):
        return GenBankParser()

    def test_first_record_only(self, parser):
        """Test only the sequence before the first // is extracted."""
        parsed = parser.parse(GENBANK_TWO_RECORDS)

        assert parsed.sequence == "ACGTACGTACGTACGTACGT"
        assert "G" * 10 not in parsed.sequence

    def test_metadata_from_first_record(self, parser):
        """Test DEFINITION and ORGANISM use fixed offsets."""
        parsed = parser.parse(GENBANK_TWO_RECORDS)

        assert parsed.metadata.definition == "Synthetic test construct."
        assert parsed.metadata.organism == "Escherichia coli"

    def test_position_numbers_stripped(self, parser):
        """Test position numbers and spacing inside ORIGIN are removed."""
        text = "ORIGIN\n        1 aaccggttaa ccggttaacc\n       21 nnnn\n//\n"

        parsed = parser.parse(text)

        assert parsed.sequence == "AACCGGTTAACCGGTTAACCNNNN"

    def test_non_nucleotide_letters_removed(self, parser):
        """Test letters outside ACGTN are removed at the end."""
        parsed = parser.parse("ORIGIN\n        1 acgtrykm acgt\n//")

        assert parsed.sequence == "ACGTACGT"

    def test_missing_origin(self, parser):
        """Test a file without ORIGIN yields no sequence."""
        parsed = parser.parse("LOCUS       X\nDEFINITION  Nothing here.\n//\n")

        assert parsed.sequence == ""
        assert parsed.metadata.definition == "Nothing here."
        assert parsed.metadata.organism is None

    def test_short_label_lines(self, parser):
        """Test label lines shorter than their offset give empty strings."""
        parsed = parser.parse("DEFINITION\nORGANISM\nORIGIN\nacgt\n")

        assert parsed.metadata.definition == ""
        assert parsed.metadata.organism == ""
        assert parsed.sequence == "ACGT"

    def test_indented_organism_not_captured(self, parser):
        """Test ORGANISM is only read at the start of a line."""
        parsed = parser.parse("SOURCE      E. coli\n  ORGANISM  Escherichia coli\nORIGIN\nacgt\n//")

        assert parsed.metadata.organism is None

    def test_no_terminator(self, parser):
        """Test sequence runs to end of file without //."""
        parsed = parser.parse("ORIGIN\n 1 acgtacgtac\n 11 ggg")

        assert parsed.sequence == "ACGTACGTACGGG"


class TestRawParser:
    """Test cases for raw text parsing."""

    def test_whole_text_normalized(self):
        parsed = RawParser().parse("hello ACGT 123 nnn xyz")

        assert parsed.sequence == "ACGTNNN"
        assert parsed.metadata.organism is None
        assert parsed.metadata.definition is None

    def test_fasta_text_in_txt_file_keeps_header_letters(self):
        """Test raw parsing does not know about FASTA headers."""
        parsed = RawParser().parse(">cat\nGGGG")

        assert parsed.sequence == "CATGGGG"


class TestInputParser:
    """Test cases for decoding and dispatch."""

    @pytest.fixture
    def parser(self):
        return InputParser()

    def test_dispatch_by_extension(self, parser):
        """Test the same text is parsed differently per extension."""
        text = ">ACGT\nGGGG"

        assert parser.parse_text(text, "x.fasta").sequence == "GGGG"
        assert parser.parse_text(text, "x.txt").sequence == "ACGTGGGG"

    def test_parse_file(self, parser):
        """Test decoding and parsing an uploaded file."""
        file = GenomeFile.from_text("plasmid.gbk", GENBANK_TWO_RECORDS)

        parsed = parser.parse_file(file)

        assert parsed.sequence == "ACGTACGTACGTACGTACGT"

    def test_utf8_bom(self, parser):
        """Test a UTF-8 BOM is stripped."""
        file = GenomeFile(name="bom.fa", data=b'\xef\xbb\xbf>org\nACGTACGTAC')

        parsed = parser.parse_file(file)

        assert parsed.metadata.organism == "org"
        assert parsed.sequence == "ACGTACGTAC"

    def test_undecodable_bytes(self, parser):
        """Test bytes that are not valid text raise DecodeError."""
        file = GenomeFile(name="binary.fa", data=b'\xff\xfe\xfa\x00\x81')

        with pytest.raises(DecodeError) as exc_info:
            parser.parse_file(file)

        assert exc_info.value.filename == "binary.fa"
        assert "binary.fa" in str(exc_info.value)

    def test_custom_encodings(self):
        """Test configured encodings are tried in order."""
        parser = InputParser(encodings=['utf-8', 'latin-1'])
        file = GenomeFile(name="legacy.txt", data="ACGTACGTAC \xe9".encode('latin-1'))

        parsed = parser.parse_file(file)

        assert parsed.sequence == "ACGTACGTAC"
