"""DOM, JSON-LD and text extraction shared by the analyzers."""
