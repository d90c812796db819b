import sys
from pathlib import Path

# Ensure project root is on sys.path when running as a script
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from glam_store.config import load_config
from glam_store.store import build_stores


def main() -> None:
    cfg = load_config()
    users, products = build_stores(cfg)
    users.init_schema()
    products.init_schema()
    target = cfg.MONGO_URI if cfg.STORE_BACKEND == "mongo" else cfg.DB_DSN
    print(f"Store initialized ({cfg.STORE_BACKEND}): {target}")


if __name__ == "__main__":
    main()
