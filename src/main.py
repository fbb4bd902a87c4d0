"""
Runs the registered directory scrapers one after another.

    python -m src.main                # every enabled scraper
    python -m src.main --smoke        # each scraper's quick --test run
    python -m src.main --only ABC     # a subset
"""

import sys
import time
import logging
import argparse
import importlib
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

# Directory scrapers that run without arguments; each module exposes main(argv) -> int
SCRAPERS = {
    'ABC': {
        'name': 'ABC Practitioner Directory',
        'module': 'src.ABC.abc_scraper',
        'enabled': True
    },
}


def run_scraper(code: str, test_mode: bool = False) -> Dict:
    """
    Call one scraper's main() and report how it ended.

    A scraper signals failure by exiting non-zero; SystemExit is caught so
    the remaining scrapers still run.
    """
    entry = SCRAPERS.get(code)
    if not entry:
        logger.error(f"Unknown scraper: {code}")
        return {'code': code, 'success': False, 'error': 'Unknown scraper'}

    logger.info(f"--- {entry['name']} ({code}) ---")
    started = time.time()

    try:
        module = importlib.import_module(entry['module'])
        exit_code = module.main(['--test'] if test_mode else [])
    except SystemExit as e:
        exit_code = e.code
    except Exception as e:
        logger.error(f"{code} crashed: {e}")
        return {'code': code, 'name': entry['name'], 'success': False,
                'error': str(e), 'elapsed_time': time.time() - started}

    result = {
        'code': code,
        'name': entry['name'],
        'success': exit_code in (0, None),
        'elapsed_time': time.time() - started,
    }
    if result['success']:
        logger.info(f"{code} finished in {result['elapsed_time']:.0f}s")
    else:
        result['error'] = f"exit status {exit_code}"
        logger.error(f"{code} {result['error']}")
    return result


def run_batch(codes: Optional[List[str]] = None, test_mode: bool = False) -> List[Dict]:
    """Run ``codes`` (default: every enabled scraper) and log a one-line-per-scraper summary."""
    if codes:
        to_run = [c for c in codes if c in SCRAPERS]
    else:
        to_run = [code for code, entry in SCRAPERS.items() if entry['enabled']]

    logger.info(f"Batch run: {', '.join(to_run) or 'nothing to run'} (smoke: {test_mode})")

    results = [run_scraper(code, test_mode) for code in to_run]

    logger.info("=" * 80)
    for r in results:
        status = "ok" if r['success'] else f"FAILED ({r.get('error')})"
        logger.info(f"{r['code']:8s} {status}")
    logger.info("=" * 80)

    return results


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description='Run the registered directory scrapers')
    parser.add_argument('--only', nargs='+', choices=list(SCRAPERS), metavar='CODE',
                        help='Scrapers to run (default: all enabled)')
    parser.add_argument('--smoke', action='store_true',
                        help="Pass --test to each scraper for a quick run")
    parser.add_argument('--list', action='store_true', help='List registered scrapers and exit')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    if args.list:
        for code, entry in SCRAPERS.items():
            print(f"{code:8s} {entry['name']}{'' if entry['enabled'] else ' (disabled)'}")
        return

    results = run_batch(codes=args.only, test_mode=args.smoke)
    if not all(r['success'] for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
