from pathlib import Path
from datetime import date

# Dossier racine du projet = dossier qui contient "data"
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DATA_DIR = PROJECT_ROOT / "data"

RAW_DIR = DATA_DIR / "raw"
RAW_BOAMP_DIR = RAW_DIR / "boamp"

PROCESSED_DIR = DATA_DIR / "processed"


def ensure_data_dirs() -> None:
    for d in [RAW_DIR, RAW_BOAMP_DIR, PROCESSED_DIR]:
        d.mkdir(parents=True, exist_ok=True)


def today_suffix(d: date | None = None) -> str:
    """
    Retourne la date au format YYYYMMDD pour suffixer les fichiers.
    """
    if d is None:
        d = date.today()
    return d.strftime("%Y%m%d")


def raw_boamp_path(d: date | None = None) -> Path:
    return RAW_BOAMP_DIR / f"boamp_{today_suffix(d)}.json"


def extracted_boamp_path(d: date | None = None) -> Path:
    return PROCESSED_DIR / f"boamp_extracted_{today_suffix(d)}.json"
