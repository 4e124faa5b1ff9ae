"""
Import d'un fichier de maladies ou d'un catalogue de produits vers l'API.

Exemples :
    python -m scripts.run_dataset_import diseases diagnosis_codes.json
    python -m scripts.run_dataset_import drugs catalogue.xlsx --replace-existing --skip-description
"""

import argparse
import os
import sys

if __name__ == "__main__" and __package__ is None:
    sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from prescriptions.datasets.batch_importer import BATCH_SIZE, BatchImporter, ImportProgress
from prescriptions.datasets.diagnosis_tree import read_disease_file
from prescriptions.datasets.drug_catalog import DrugImportOptions, read_drug_file
from prescriptions.utils.logging import setup_logging


def print_progress(progress: ImportProgress):
    eta = progress.estimated_time_remaining
    eta_text = f", ~{eta:.1f}s restantes" if eta else ""
    print(
        f"  [{progress.current_batch}/{progress.total_batches}] "
        f"{progress.processed}/{progress.total} traités, "
        f"{progress.imported} importés, {progress.errors} erreurs{eta_text}"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import par lots vers l'API Prescriptions Manager")
    parser.add_argument("entity", choices=["diseases", "drugs"])
    parser.add_argument("path", help="Fichier JSON (maladies) ou CSV/XLSX/JSON (produits)")
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--batch-size", type=int, default=BATCH_SIZE)
    parser.add_argument("--replace-existing", action="store_true")
    for field in ("barcode", "atc", "active-ingredient", "product-name", "categories", "description"):
        parser.add_argument(f"--skip-{field}", action="store_true", help=f"Ne pas importer le champ {field}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging()

    if not os.path.exists(args.path):
        print(f"❌ ERREUR: Fichier non trouvé : {args.path}")
        return 1

    if args.entity == "diseases":
        items = read_disease_file(args.path)
        importer = BatchImporter(args.base_url, "/api/diseases/import", payload_key="diseases",
                                 batch_size=args.batch_size)
    else:
        options = DrugImportOptions(
            include_barcode=not args.skip_barcode,
            include_atc=not args.skip_atc,
            include_active_ingredient=not args.skip_active_ingredient,
            include_product_name=not args.skip_product_name,
            include_categories=not args.skip_categories,
            include_description=not args.skip_description,
            replace_existing=args.replace_existing,
        )
        items = read_drug_file(args.path, options)
        importer = BatchImporter(args.base_url, "/api/drugs/import", payload_key="items",
                                 batch_size=args.batch_size)

    print(f"🚀 Import de {len(items)} éléments ({args.entity}) vers {args.base_url}")
    progress = importer.run(items, replace_existing=args.replace_existing, on_progress=print_progress)
    print(f"\n✨ Terminé : {progress.imported} importés, {progress.errors} erreurs sur {progress.total}.")
    return 0 if progress.errors == 0 else 2


if __name__ == "__main__":
    sys.exit(main())
