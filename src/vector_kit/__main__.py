# src/vector_kit/__main__.py

import logging

import uvicorn

from vector_kit.api import create_app
from vector_kit.config import VectorKitConfig
from vector_kit.vectorstores import (
    SimilaritySearchEngine,
    VectorRecordStore,
    create_backend,
)

logger = logging.getLogger(__name__)


def main() -> None:
    config = VectorKitConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    store = VectorRecordStore(create_backend(config))
    app = create_app(store, SimilaritySearchEngine(store))

    logger.info(
        "Serving vector-kit on %s:%d (backend=%s, db_path=%s)",
        config.host,
        config.port,
        config.backend,
        config.db_path,
    )
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
