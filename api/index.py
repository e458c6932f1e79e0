import logging

from movies_api.main import app

# Setup basic logging so request errors show up in the platform logs
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

logger.info("api/index.py initialized with %d movies", len(app.state.store))

# Entry point for serverless deployments; exports the FastAPI app instance
