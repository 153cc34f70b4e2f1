#!/usr/bin/env python
"""
Start the Climate Assist FastAPI backend.
"""

import os
import sys
import argparse
import logging
import uvicorn

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def main():
    parser = argparse.ArgumentParser(
        description="Start the Climate Assist API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python run_web.py                       # defaults from the environment
    python run_web.py --port 8080           # listen on port 8080
    python run_web.py --llm offline         # serve deterministic fallbacks only
    python run_web.py --persistence memory  # in-process tables, MEMORY_AUTH_TOKENS for auth
    python run_web.py --reload              # auto reload while developing
        """
    )

    parser.add_argument(
        '--host',
        type=str,
        default='0.0.0.0',
        help='bind address (default: 0.0.0.0)'
    )

    parser.add_argument(
        '--port',
        type=int,
        default=None,
        help='port (default: FASTAPI_PORT or 8000)'
    )

    parser.add_argument(
        '--reload',
        action='store_true',
        help='enable auto reload (development)'
    )

    parser.add_argument(
        '--llm',
        type=str,
        choices=['gemini', 'openai', 'offline'],
        default=None,
        help='generative model provider (default: LLM_PROVIDER or gemini)'
    )

    parser.add_argument(
        '--persistence',
        type=str,
        choices=['supabase', 'memory'],
        default=None,
        help='persistence backend (default: PERSISTENCE_BACKEND or supabase)'
    )

    parser.add_argument(
        '--workers',
        type=int,
        default=1,
        help='worker processes (default: 1)'
    )

    args = parser.parse_args()

    if args.llm:
        os.environ['LLM_PROVIDER'] = args.llm
    if args.persistence:
        os.environ['PERSISTENCE_BACKEND'] = args.persistence

    from climate_assist.infra.config import get_config

    get_config.cache_clear()
    cfg = get_config()
    port = args.port or cfg.fastapi_port
    display_host = args.host if args.host != '0.0.0.0' else 'localhost'

    logger.info(f"Starting API server: http://{display_host}:{port}")
    logger.info(f"LLM provider: {cfg.llm_provider}")
    logger.info(f"Persistence backend: {cfg.persistence_backend}")
    logger.info(f"API docs: http://{display_host}:{port}/docs")

    uvicorn.run(
        "climate_assist.api.server:app",
        host=args.host,
        port=port,
        reload=args.reload,
        workers=args.workers if not args.reload else 1,
        log_level="info"
    )


if __name__ == '__main__':
    main()
