"""Local EchoPrompt server.

Run with ``uvicorn app:app --reload`` from this directory. Set ``GEMINI_API_KEY``
to enable remote generation and ``ECHOPROMPT_DATABASE_URL`` (for example
``sqlite:///echoprompt.db``) to keep prompts and analytics between restarts.
"""

import logging

from echoprompt.adapters.fastapi_app import create_app_from_config

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

app = create_app_from_config()
