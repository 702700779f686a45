"""xz container building blocks: uvarints, CRC checksums, stream header, footer and index; plus rolling hashes, flag parsing, logging and the xb build helper."""

__version__ = "0.5.11"