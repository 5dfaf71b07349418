# config.py

import os
from dotenv import load_dotenv

load_dotenv()

# --- IRIS API Configuration ---
IRIS_API_BASE_URL = os.getenv("IRIS_API_BASE_URL", "https://iris.example.com/api/v1")
IRIS_API_KEY = os.getenv("IRIS_API_KEY", "")
IRIS_API_TIMEOUT = int(os.getenv("IRIS_API_TIMEOUT", 60))
IRIS_API_MAX_RETRIES = int(os.getenv("IRIS_API_MAX_RETRIES", 3))
IRIS_API_CONCURRENCY_LIMIT = int(os.getenv("IRIS_API_CONCURRENCY_LIMIT", 4))
EXPONENTIAL_BACKOFF_FACTOR = float(os.getenv("EXPONENTIAL_BACKOFF_FACTOR", 1.5))
IRIS_SUBMISSION_PATH = "/shipping-instructions"

SUPPORTED_BATCH_EXTENSIONS = [".json"]

TEMP_DIR = os.getenv("TEMP_DIR", "temp_processing")
REPORT_CHUNK_SIZE = int(os.getenv("REPORT_CHUNK_SIZE", 50)) # Rows per CSV flush

LOG_FILE = os.getenv("LOG_FILE", "app_log.log")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Progress steps reported by the submission workflow, in order.
SUBMISSION_STEPS = ["preparing", "validating", "submitting", "confirming"]

# --- Column Order Configuration ---
REPORT_COLUMN_ORDER = [
    # === Core fields ===
    "RECORD_Index",
    "RECORD_Id",
    "RECORD_FileName",
    "Processing_Status",

    # === Validation summary ===
    "VALIDATION_IsValid",
    "VALIDATION_TotalFields",
    "VALIDATION_ValidFields",
    "VALIDATION_InvalidFields",
    "VALIDATION_WarningFields",
    "VALIDATION_AutoFixedFields",

    # === Detail ===
    "VALIDATION_Errors",
    "VALIDATION_Warnings",
    "VALIDATION_AutoFixes",
]
