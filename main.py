from dotenv import load_dotenv
load_dotenv()

import argparse
import asyncio
import sys

from core.bootstrap import build_orchestrator
from core.exceptions import OrchestratorError

USAGE = """Usage:
  search <query>      - Smart routed search
  multi <query>       - Search all domains
  route <query>       - Show which domain a query belongs to
  connect <a> -> <b>  - Find concept connections
  stats               - Show record and graph counts per domain"""


def parse_args(argv):
    parser = argparse.ArgumentParser(description="Query across science, technology, and philosophy domains.", usage=USAGE)
    parser.add_argument("command", choices=["search", "multi", "route", "connect", "stats"])
    parser.add_argument("query", nargs="*")
    parser.add_argument("-k", type=int, default=None, help="Hits per domain.")
    parser.add_argument("--max-hops", type=int, default=None, help="Bound for 'connect'.")
    args = parser.parse_args(argv)
    if args.command != "stats" and not args.query:
        parser.error(f"'{args.command}' needs a query")
    return args


async def run(args) -> str:
    orchestrator = build_orchestrator()
    query = " ".join(args.query)
    try:
        if args.command == "search":
            result = await orchestrator.search(query, k=args.k)
        elif args.command == "multi":
            result = await orchestrator.multi_domain_search(query, k=args.k)
        elif args.command == "route":
            result = await orchestrator.route(query)
        elif args.command == "stats":
            result = await orchestrator.stats()
        else:
            concept_a, separator, concept_b = query.partition(" -> ")
            if not separator:
                raise SystemExit("connect expects '<a> -> <b>'")
            path = await orchestrator.find_connections(concept_a, concept_b, max_hops=args.max_hops)
            return path.render() or "No connection found."
        return result.model_dump_json(indent=2, by_alias=True)
    finally:
        orchestrator.close()


def main(argv=None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        print(asyncio.run(run(args)))
    except OrchestratorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
