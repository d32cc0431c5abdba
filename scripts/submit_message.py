"""Queue a message on a running tower and print the resulting state."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from clacks.client import DEFAULT_BASE_URL, ClacksClient, ClacksClientError, MessageRejected


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("message", nargs="?", help="Text to transmit")
    parser.add_argument("--url", default=DEFAULT_BASE_URL, help="Base URL of the tower API")
    parser.add_argument("--show-config", action="store_true", help="Print the supported characters")
    args = parser.parse_args()

    client = ClacksClient(args.url)
    try:
        if args.show_config:
            config = client.get_config()
            print("supported:", "".join(config.get("supportedCharacters", [])), flush=True)
            print("max_bytes:", config.get("maxMessageLenInBytes"), flush=True)
        if args.message is None:
            return 0
        client.submit_message(args.message)
        print(json.dumps(client.get_state(), indent=2), flush=True)
    except MessageRejected as exc:
        print("rejected:", exc.reason, file=sys.stderr, flush=True)
        return 3 if exc.queue_full else 1
    except ClacksClientError as exc:
        print("error:", exc, file=sys.stderr, flush=True)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
