# src/initres/core/config.py

import logging
import os
import re

from dotenv import load_dotenv

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)


class Config:
    """
    Handles the application's configuration by loading values from environment variables.
    """

    def __init__(self):
        # --- Usage source variables ---
        # Endpoint URI of the metrics backend, query parameters included
        # (e.g. https://hawkular:443?tenant=heapster&useServiceAccount=true).
        self.INITRES_SOURCE_URI = os.getenv("INITRES_SOURCE_URI", "")

    # --- Logging variables ---
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # --- HTTP client variables ---
    DEFAULT_TIMEOUT_CONNECT = float(os.getenv("DEFAULT_TIMEOUT_CONNECT", "5"))
    DEFAULT_TIMEOUT_READ = float(os.getenv("DEFAULT_TIMEOUT_READ", "30"))
    USER_AGENT = os.getenv("USER_AGENT", "initres/0.1")

    # Upper bound on concurrent datapoint reads for a single estimate.
    MAX_CONCURRENT_READS = int(os.getenv("INITRES_MAX_CONCURRENT_READS", "10"))

    # --- Estimation defaults (used by the CLI) ---
    DEFAULT_PERCENTILE = int(os.getenv("DEFAULT_PERCENTILE", "90"))
    DEFAULT_WINDOW = os.getenv("DEFAULT_WINDOW", "7d")

    # --- Credentials ---
    SERVICE_ACCOUNT_TOKEN_FILE = os.getenv(
        "SERVICE_ACCOUNT_TOKEN_FILE", "/var/run/secrets/kubernetes.io/serviceaccount/token"
    )

    def validate_instance(self):
        if not 0 < self.DEFAULT_PERCENTILE <= 100:
            raise ValueError("DEFAULT_PERCENTILE must be in the range (0, 100].")
        if self.MAX_CONCURRENT_READS < 1:
            raise ValueError("INITRES_MAX_CONCURRENT_READS must be at least 1.")
        if not re.match(r"^(\d+)([smhd])$", self.DEFAULT_WINDOW.lower()):
            raise ValueError("DEFAULT_WINDOW format is invalid. Use 's', 'm', 'h' or 'd'.")
        if not self.INITRES_SOURCE_URI:
            logging.getLogger(__name__).debug("INITRES_SOURCE_URI is not set.")


# Instantiate the config to be imported by other modules
config = Config()
config.validate_instance()
