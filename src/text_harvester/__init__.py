"""Text Harvester: bounded acquisition and extraction of natural-language text.

Fetches a single remote resource (web page or plain-text document) and turns
it into a cleaned, length-bounded block of prose suitable for downstream
analysis such as word-frequency or generative models.

Sub-packages:
- ``acquisition``: size probing, fetch planning and bounded httpx retrieval
- ``extraction``: text normalizer, domain classifier and extraction strategies
- ``api``: thin FastAPI request shell (``GET /api/scrape``)
- ``config``: environment-backed settings
- ``core``: exceptions, logging configuration and response schemas
- ``pipeline``: orchestrator tying the stages together
- ``cli``: ``text-harvester`` console script
"""

__version__ = "0.1.0"
