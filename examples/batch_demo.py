#!/usr/bin/env python3
"""Demo script: analyze a small batch of in-memory genome files."""

from genome_analyzer.batch_processor import BatchProcessor
from genome_analyzer.error_handler import setup_error_handler
from genome_analyzer.identifiers import SequentialIdGenerator
from genome_analyzer.logging_config import setup_logging
from genome_analyzer.models import GenomeFile
from genome_analyzer.output_formatter import format_fasta, report_json, share_text
from genome_analyzer.record_assembler import RecordAssembler


SAMPLE_FILES = [
    GenomeFile.from_text(
        "ecoli_fragment.fasta",
        ">Escherichia coli K-12 fragment\n"
        "AGCTTTTCATTCTGACTGCAACGGGCAATATGTCTCTGTGTGGATTAAAAAAAGAGTGTCTGATAGCAGCTTCTGAACTG\n"
        "GTTACCTGCCGTGAGTAAATTAAAATTTTATTGACTTAGGTCACTAAATACTTTAACCAATATAGGCATAGCGCACAGAC\n"
    ),
    GenomeFile.from_text("notes.txt", "remember to upload the real file"),
    GenomeFile.from_text(
        "puc19_fragment.gbk",
        "LOCUS       PUC19FRAG               60 bp    DNA     circular SYN\n"
        "DEFINITION  pUC19 cloning vector fragment.\n"
        "ORGANISM  synthetic construct\n"
        "ORIGIN\n"
        "        1 tcgcgcgttt cggtgatgac ggtgaaaacc tctgacacat gcagctcccg gagacggtca\n"
        "//\n"
    ),
    GenomeFile(name="corrupt.fa", data=b"\xff\xfe\x00\x81"),
]


def main():
    """Main demo function."""
    print("=== Genome Analyzer Batch Demo ===\n")

    setup_logging(log_level="INFO", log_dir="demo_logs", console=False)
    error_handler = setup_error_handler()

    processor = BatchProcessor(
        assembler=RecordAssembler(id_generator=SequentialIdGenerator(prefix="demo")),
        error_handler=error_handler
    )
    processor.process_batch(SAMPLE_FILES)

    for record, analysis in processor.pairs():
        print(share_text(record))
        for trait in analysis.traits:
            print(f"  {trait.name}: {trait.score}%")
        print()
        print(format_fasta(record))
        print()
        print(report_json(record, analysis))
        print()

    print("Failures:")
    for failure in processor.failures:
        print(f"  ✗ {failure.filename} [{failure.error_type}] {failure.message}")

    summary = error_handler.get_error_summary()
    print(f"\nTotal errors: {summary['total_errors']} {summary['by_type']}")


if __name__ == "__main__":
    main()
