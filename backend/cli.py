import argparse
import json
import logging
import sys
from typing import Any, Dict

import yaml

from config import Config, load_config
from scorer import Candidate, CriteriaSet, ScoringEngine, WeightConsensus

logger = logging.getLogger("candidate_ranker")


def setup_logging(level: str = "INFO") -> None:
    """Configure root logging for command line runs."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        stream=sys.stderr,
    )


def _read_input(path: str) -> Any:
    """Read a YAML (or JSON) input file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)
    if data is None:
        raise ValueError(f"Input file {path} is empty")
    return data


def _emit(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, default=str))


def cmd_rank(args: argparse.Namespace, config: Config) -> None:
    data = _read_input(args.input)
    engine = ScoringEngine(config)
    criteria = CriteriaSet.from_list(data.get("criteria", []))

    proposals = data.get("weight_proposals")
    if proposals:
        engine.refine_weights(criteria, proposals)

    candidates = [Candidate.from_dict(c) for c in data.get("candidates", [])]
    report = engine.evaluate(candidates, criteria, data.get("thresholds"))

    payload = report.to_dict()
    payload["weights"] = criteria.weights
    payload["settings"] = config.scoring.model_dump()
    if args.shortlist:
        payload["shortlist"] = [e.to_dict() for e in engine.shortlist(report, candidates)]
    _emit(payload)


def cmd_consensus(args: argparse.Namespace, config: Config) -> None:
    data = _read_input(args.input)
    proposals = data.get("proposals", []) if isinstance(data, dict) else data
    consensus = WeightConsensus(config.consensus.outlier_tolerance)
    _emit({"weights": consensus.consensus(proposals)})


def cmd_final(args: argparse.Namespace, config: Config) -> None:
    data = _read_input(args.input)
    engine = ScoringEngine(config)
    candidates = [Candidate.from_dict(c) for c in data.get("candidates", [])]
    ranking = engine.rank_final(candidates)
    _emit({
        "settings": config.scoring.model_dump(),
        "stage_weights": config.stages.weights,
        "ranked_candidates": [e.to_dict() for e in ranking],
    })


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="candidate-ranker",
        description="Fuzzy multi-criteria candidate scoring and ranking",
    )
    parser.add_argument("--config", help="Path to YAML configuration (defaults apply when omitted)")
    parser.add_argument("--log-level", help="Override the configured log level")
    sub = parser.add_subparsers(dest="cmd")

    rnk = sub.add_parser("rank", help="Score and rank candidates against job criteria")
    rnk.add_argument("--input", required=True, help="YAML/JSON file with criteria and candidates")
    rnk.add_argument("--shortlist", action="store_true", help="Also print the interview shortlist")
    rnk.set_defaults(func=cmd_rank)

    con = sub.add_parser("consensus", help="Consensus weights from several evaluators")
    con.add_argument("--input", required=True, help="YAML/JSON file with weight proposals")
    con.set_defaults(func=cmd_consensus)

    fin = sub.add_parser("final", help="Aggregate interview stages and rank candidates")
    fin.add_argument("--input", required=True, help="YAML/JSON file with candidate stage results")
    fin.set_defaults(func=cmd_final)

    args = parser.parse_args(argv)
    if not args.cmd:
        parser.print_help()
        return 1

    config = load_config(args.config) if args.config else Config()
    setup_logging(args.log_level or config.log_level)

    try:
        args.func(args, config)
    except (OSError, ValueError, TypeError, KeyError, yaml.YAMLError) as e:
        logger.error(f"{args.cmd} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
