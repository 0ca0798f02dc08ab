"""Cross-cutting building blocks: exceptions, logging and response schemas."""
