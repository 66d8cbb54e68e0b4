# handler.py
"""AWS Lambda entry point.

API Gateway events are translated to ASGI by Mangum and served by the
Pocketbook FastAPI app. Tables are created when `pocketbook.main` is
imported, so the ASGI lifespan protocol is not needed.
"""

from mangum import Mangum
from pocketbook.main import app

handler = Mangum(app, lifespan="off")
