from pathlib import Path


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent

# Log directory
LOG_DIR = BASE_DIR / 'logs'

# Demo seed data for the in-memory store
DEFAULT_SEED_DATA_PATH = BASE_DIR / 'src' / 'platform' / 'constant' / 'seed_data.json'
