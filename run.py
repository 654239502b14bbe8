# run.py
from __future__ import annotations
import sys
from pathlib import Path
import json
import logging
import argparse

sys.path.append(str(Path(__file__).parent / "src"))
from importlib import import_module
extractor_main = import_module("positioned_table_extractor.main")
extractor_parser = import_module("positioned_table_extractor.parser")
structures = import_module("positioned_table_extractor.structures")

# La configuración del logging se hace en main(); aquí solo el logger del módulo.
log = logging.getLogger(__name__)

def _ensure_parent_dir(path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)

def _load_pages(input_path: str):
    if Path(input_path).suffix.lower() == ".json":
        return extractor_parser.load_pages_json(input_path)
    items = extractor_parser.parse_hocr_items(input_path)
    return extractor_parser.items_to_pages(items), []

def main() -> None:
    parser = argparse.ArgumentParser(description="Reconstruir tablas o texto a partir de fragmentos posicionados (hOCR o JSON).")
    parser.add_argument("input", type=str, help="Ruta al archivo .hocr/.html o a un volcado .json de páginas")
    parser.add_argument("--mode", type=str, default="table", choices=["table", "text"],
                        help="Salida: tabla (JSON headers/rows) o texto plano (default: table)")
    parser.add_argument("--tables-only", action="store_true",
                        help="Excluir de la tabla el texto que no forma parte de ella")
    parser.add_argument("--pages", type=str, default="",
                        help="Rango de páginas, p.ej. '1-3, 5' (default: todas)")
    parser.add_argument("--region", type=float, nargs=5, action="append", metavar=("X", "Y", "W", "H", "PAGE"),
                        help="Región de recorte en coordenadas de página; se puede repetir")
    parser.add_argument("--workers", type=int, default=1, help="Páginas procesadas en paralelo (default: 1)")
    parser.add_argument("--output", type=str, help="Archivo de salida (default: stdout)")
    parser.add_argument("--loglevel", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Nivel de verbosidad del log (default: INFO)")

    args = parser.parse_args()
    logging.basicConfig(level=args.loglevel, format='%(asctime)s - %(levelname)s - %(message)s')
    log.info(f"ENTRADA: {args.input}")

    try:
        pages, regions = _load_pages(args.input)
        if args.region:
            regions = list(regions) + [
                structures.CropRegion(x=x, y=y, width=w, height=h, page=int(p))
                for x, y, w, h, p in args.region
            ]

        max_page = max((p.page for p in pages), default=0)
        try:
            selected = extractor_main.parse_page_range(args.pages, max_page)
        except ValueError as e:
            parser.error(f"--pages: {e}")
        if selected:
            wanted = set(selected)
            pages = [p for p in pages if p.page in wanted]

        if args.mode == "text":
            if not extractor_main.has_embedded_text(pages):
                log.warning("Poco texto en las páginas de muestra; puede requerir OCR.")
            output = extractor_main.compile_text(pages, regions=regions, max_workers=args.workers)
        else:
            table = extractor_main.compile_tables(
                pages,
                regions=regions,
                tables_only=args.tables_only,
                max_workers=args.workers,
                progress_callback=lambda i, n: log.debug("Página %d/%d", i, n),
            )
            output = json.dumps(table.to_dict(), ensure_ascii=False, indent=2)

        if args.output:
            _ensure_parent_dir(args.output)
            with open(args.output, "w", encoding="utf-8") as fh:
                fh.write(output)
            log.info(f"SALIDA: {args.output}")
        else:
            print(output)
        log.info("✔ Proceso completado.")
    except FileNotFoundError:
        log.error(f"Error: No se encontró el archivo de entrada: {args.input}")
        sys.exit(1)
    except Exception as e:
        log.error(f"Ocurrió un error inesperado: {e}", exc_info=True)
        sys.exit(1)

if __name__ == "__main__":
    main()
