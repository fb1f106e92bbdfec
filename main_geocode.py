#!/usr/bin/env python3
"""
Google Maps Platform - Batch Geocoding Script

Geocodes a file of addresses (one per line) through a rate-limited,
retrying client and writes one JSON object per line to the output file.

Usage:
    python main_geocode.py addresses.txt results.jsonl [options]

Options:
    --rate N               Requests allowed per period for the Geocoding API (default: 50)
    --per SECONDS          Length of the rate period in seconds (default: 1)
    --max-retries N        Retries after the first attempt (default: 3)
    --max-delay SECONDS    Longest backoff delay between retries (default: 60)
    --log-level LEVEL      Logging level (default: INFO)
"""

import argparse
import json
import sys
import time
from pathlib import Path
from typing import Any, Dict, List

from gmaps_platform.config.config_module import API_KEY_ENV_VAR, ConfigError, get_api_key, load_config
from gmaps_platform.config.logger_module import initialize_logger, log_error, log_info
from gmaps_platform.apis import geocode
from gmaps_platform.transport import ApiCategory, ApiStatusError, GoogleMapsClient, GoogleMapsError


class BatchGeocoder:
    """Geocodes addresses one after another and keeps run statistics."""

    def __init__(self, client: GoogleMapsClient):
        self.client = client
        self.stats = {
            'addresses': 0,
            'geocoded': 0,
            'no_results': 0,
            'errors': 0,
            'start_time': None,
        }

    def geocode_address(self, address: str) -> Dict[str, Any]:
        """Geocode one address into an output record."""
        record: Dict[str, Any] = {'address': address}
        try:
            results = geocode(self.client, address=address)
        except ApiStatusError as e:
            if e.status != 'ZERO_RESULTS':
                raise
            results = []

        if not results:
            record['error'] = 'ZERO_RESULTS'
            self.stats['no_results'] += 1
            return record

        top = results[0]
        record['formatted_address'] = top.get('formatted_address')
        record['location'] = top.get('geometry', {}).get('location')
        record['place_id'] = top.get('place_id')
        self.stats['geocoded'] += 1
        return record

    def process_file(self, input_path: str, output_path: str) -> bool:
        """
        Geocode every non-empty line of input_path.

        Returns:
            True if every address was processed without an API failure
        """
        self.stats['start_time'] = time.time()
        addresses = [line.strip() for line in Path(input_path).read_text(encoding='utf-8').splitlines()]
        addresses = [address for address in addresses if address]
        log_info(f"Geocoding {len(addresses)} addresses from {input_path}")

        records: List[Dict[str, Any]] = []
        for address in addresses:
            self.stats['addresses'] += 1
            try:
                records.append(self.geocode_address(address))
            except GoogleMapsError as e:
                log_error(f"Failed to geocode '{address}': {e}")
                records.append({'address': address, 'error': str(e)})
                self.stats['errors'] += 1

        with open(output_path, 'w', encoding='utf-8') as f:
            for record in records:
                f.write(json.dumps(record, ensure_ascii=False) + '\n')

        log_info(f"Wrote {len(records)} records to {output_path}")
        self._print_statistics()
        return self.stats['errors'] == 0

    def _print_statistics(self):
        elapsed = time.time() - self.stats['start_time']
        print("\n" + "=" * 60)
        print("Geocoding statistics")
        print("=" * 60)
        print(f"Addresses:   {self.stats['addresses']}")
        print(f"Geocoded:    {self.stats['geocoded']}")
        print(f"No results:  {self.stats['no_results']}")
        print(f"Errors:      {self.stats['errors']}")
        print(f"Time:        {elapsed:.1f}s")
        print("=" * 60)


def parse_arguments():
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Batch geocode addresses with the Google Maps Geocoding API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s addresses.txt results.jsonl
  %(prog)s addresses.txt results.jsonl --rate 3000 --per 60
  %(prog)s addresses.txt results.jsonl --max-retries 5 --log-level DEBUG
        """
    )

    parser.add_argument('input', help='Text file with one address per line')
    parser.add_argument('output', help='Output JSON Lines file')

    parser.add_argument('--rate', type=int, default=50,
                       help='Requests allowed per period for the Geocoding API (default: 50)')
    parser.add_argument('--per', type=float, default=1.0,
                       help='Length of the rate period in seconds (default: 1)')
    parser.add_argument('--max-retries', type=int, default=3,
                       help='Retries after the first attempt (default: 3)')
    parser.add_argument('--max-delay', type=float, default=60.0,
                       help='Longest backoff delay between retries in seconds (default: 60)')
    parser.add_argument('--log-level',
                       choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                       default='INFO',
                       help='Logging level (default: INFO)')

    return parser.parse_args()


def main():
    """Main entry point for batch geocoding."""
    args = parse_arguments()

    initialize_logger(log_level=args.log_level)
    load_config()

    try:
        api_key = get_api_key()
    except ConfigError as e:
        print(f"\nConfiguration Error: {e}")
        print(f"\nSet {API_KEY_ENV_VAR} in a .env file or as an environment variable.")
        return 1

    if not Path(args.input).exists():
        print(f"\nInput file not found: {args.input}")
        return 1

    try:
        client = (GoogleMapsClient(api_key=api_key)
                  .with_rate(ApiCategory.GEOCODING, args.rate, args.per)
                  .with_max_retries(args.max_retries)
                  .with_max_delay(args.max_delay))
    except ValueError as e:
        print(f"\nInvalid settings: {e}")
        return 1

    try:
        success = BatchGeocoder(client).process_file(args.input, args.output)
    finally:
        client.close()

    if success:
        print(f"\nResults saved to: {args.output}")
        return 0
    print("\nSome addresses failed. Check the logs for details.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
