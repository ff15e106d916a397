"""Tests for record validation and assembly."""

from dataclasses import FrozenInstanceError
from datetime import datetime

import pytest

from genome_analyzer.exceptions import ValidationError
from genome_analyzer.identifiers import SequentialIdGenerator
from genome_analyzer.models import GenomeFile, GenomeMetadata, ParsedSequence
from genome_analyzer.record_assembler import (
    MIN_SEQUENCE_LENGTH, RecordAssembler, gc_content, strip_extension
)


FIXED_TIME = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def assembler():
    """Create an assembler with deterministic ids and clock."""
    return RecordAssembler(
        id_generator=SequentialIdGenerator(prefix="rec"),
        clock=lambda: FIXED_TIME
    )


class TestStripExtension:
    """Test cases for record name derivation."""

    @pytest.mark.parametrize("filename,expected", [
        ("sample.fasta", "sample"),
        ("my.genome.gbk", "my.genome"),
        ("noextension", "noextension"),
        ("trailing.", "trailing."),
        ("reads.TXT", "reads"),
    ])
    def test_strip_extension(self, filename, expected):
        assert strip_extension(filename) == expected


class TestGCContent:
    """Test cases for GC content."""

    def test_all_gc(self):
        assert gc_content("GCGCGCGCGC") == 100.0

    def test_no_gc(self):
        assert gc_content("AAAAAAAAAA") == 0.0

    def test_half_gc(self):
        assert gc_content("ACGTACGTAC") == 50.0

    def test_rounded_to_two_places(self):
        assert gc_content("GCGCAAAAAAAA") == 33.33
        assert gc_content("GCGCGCGCAAAA") == 66.67

    def test_round_half_up(self):
        """Test 3.125 rounds up to 3.13 rather than to even."""
        assert gc_content("G" + "A" * 31) == 3.13

    def test_n_counts_in_length(self):
        assert gc_content("GGNNNNNNNN") == 20.0


class TestRecordAssembler:
    """Test cases for genome record assembly."""

    def test_assemble(self, assembler):
        """Test all record fields are populated."""
        parsed = ParsedSequence("ACGTACGTAC", GenomeMetadata(organism="E. coli"))

        record = assembler.assemble(parsed, "sample.fasta")

        assert record.id == "rec_1"
        assert record.name == "sample"
        assert record.sequence == "ACGTACGTAC"
        assert record.size == 10
        assert record.gc_content == 50.0
        assert record.organism == "E. coli"
        assert record.definition is None
        assert record.uploaded_at == FIXED_TIME

    def test_size_matches_sequence(self, assembler):
        record = assembler.assemble(ParsedSequence("ACGTN" * 41), "long.txt")

        assert record.size == len(record.sequence) == 205

    def test_minimum_length_accepted(self, assembler):
        record = assembler.assemble(ParsedSequence("A" * MIN_SEQUENCE_LENGTH), "min.txt")

        assert record.size == 10

    @pytest.mark.parametrize("sequence", ["", "A", "ACGTACGTA"])
    def test_short_sequence_rejected(self, assembler, sequence):
        """Test sequences under 10 symbols raise ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            assembler.assemble(ParsedSequence(sequence), "short.fasta")

        assert str(exc_info.value) == "sequence too short or invalid"
        assert exc_info.value.filename == "short.fasta"

    def test_rejected_sequence_does_not_consume_id(self, assembler):
        with pytest.raises(ValidationError):
            assembler.assemble(ParsedSequence("ACG"), "short.fasta")

        record = assembler.assemble(ParsedSequence("ACGTACGTAC"), "ok.fasta")

        assert record.id == "rec_1"

    def test_record_is_immutable(self, assembler):
        record = assembler.assemble(ParsedSequence("ACGTACGTAC"), "sample.fasta")

        with pytest.raises(FrozenInstanceError):
            record.sequence = "GGGGGGGGGG"

    def test_ids_unique_within_session(self, assembler):
        ids = {
            assembler.assemble(ParsedSequence("ACGTACGTAC"), f"s{i}.fa").id
            for i in range(50)
        }

        assert len(ids) == 50

    def test_read_genome_file(self, assembler):
        """Test decode, parse and assemble in one call."""
        file = GenomeFile.from_text("ecoli.fa", ">Escherichia coli K-12\nacgtacgtac\nGGCC\n")

        record = assembler.read_genome_file(file)

        assert record.name == "ecoli"
        assert record.sequence == "ACGTACGTACGGCC"
        assert record.organism == "Escherichia coli K-12"
        assert record.gc_content == 64.29

    def test_read_genome_file_too_short(self, assembler):
        file = GenomeFile.from_text("notes.txt", "this file has no genome")

        with pytest.raises(ValidationError):
            assembler.read_genome_file(file)
