#!/usr/bin/env python3
"""
Tempo - Music streaming API

Single entry point for the application.
Run with: python run.py
"""

import logging
import os

from dotenv import load_dotenv
load_dotenv()

from config import config

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)

from app import create_app

app = create_app()

if __name__ == '__main__':
    host = os.getenv('TEMPO_HOST', '0.0.0.0')
    port = int(os.getenv('TEMPO_PORT', '3000'))

    logging.getLogger(__name__).info('Server is running at http://localhost:%d', port)
    app.run(debug=config.DEBUG, host=host, port=port, threaded=True)
