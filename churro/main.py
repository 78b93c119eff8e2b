import logging

import uvicorn
from fastapi.middleware.cors import CORSMiddleware

from churro.api import chat
from churro.api.app import app
from churro.api.services.config import CORS_ORIGINS, LOG_LEVEL

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,  # Set CORS_ORIGINS to your frontend domains in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(chat.router, prefix="/api", tags=["chat"])


def run():
    uvicorn.run("churro.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
