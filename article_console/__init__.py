"""Article Console.

Streamlit admin console and public reader over a CMS REST backend:
- Frozen dataclass configuration
- API gateway client with bearer token attachment and error normalization
- Request lifecycle: cancel-on-supersede and bounded retry
- Role gate for the admin area
- Path-based page routing
"""

__version__ = "1.0.0"
