"""
archive_convert -- Conversion of legacy archival records into target JSON documents.

Provides typed source records, per-kind converters, date and note
normalization, identifier repair, and the dispatcher and run service that
drive a conversion.

Architecture:
    archive_convert/ sits above archive_kernel/. Configuration is obtained
    through archive_config and handed in; converters never read files.
"""
