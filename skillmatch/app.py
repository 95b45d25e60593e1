import argparse
import json
import sys
from pathlib import Path

from . import __version__
from .database import get_session, init_database
from .env import Settings, load_env
from .errors import SkillmatchError, ValidationError
from .logger import get_logger, reset_logger
from .matching import match_skills, text_similarity, user_similarity
from .normalize import parse_skill_list
from .schema import validate_job, validate_profile
from .skills import extract_job_skills, extract_resume_skills
from .storage import add_job, add_profile, get_profile, list_jobs, list_profiles
from .suggestions import SUGGESTION_KINDS, build_suggestions


def _read_json(path_arg: str) -> dict:
    input_path = Path(path_arg)
    if not input_path.exists():
        raise SystemExit(f"Input file not found: {input_path}")
    with input_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _dump(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def _open_session(settings: Settings):
    init_database(settings.db_path)
    return get_session(settings.db_path)


def cmd_match(args: argparse.Namespace, settings: Settings) -> None:
    result = match_skills(parse_skill_list(args.candidate), parse_skill_list(args.required))
    get_logger().record_match()
    if args.json:
        _dump(result.to_dict())
        return
    print(f"Score: {result.score}")
    print(f"Common: {', '.join(result.common_skills) or '-'}")
    print(f"Missing: {', '.join(result.missing_skills) or '-'}")
    print(result.explanation)


def cmd_similarity(args: argparse.Namespace, settings: Settings) -> None:
    result = user_similarity(parse_skill_list(args.a), parse_skill_list(args.b))
    get_logger().record_similarity()
    if args.json:
        _dump(result.to_dict())
        return
    print(f"Score: {result.score}")
    print(f"Common: {', '.join(result.common_skills) or '-'}")
    print(f"Unique: {', '.join(result.unique_skills) or '-'}")


def cmd_text(args: argparse.Namespace, settings: Settings) -> None:
    get_logger().record_text_comparison()
    print(text_similarity(args.a, args.b))


def cmd_extract(args: argparse.Namespace, settings: Settings) -> None:
    if args.input:
        input_path = Path(args.input)
        if not input_path.exists():
            raise SystemExit(f"Input file not found: {input_path}")
        text = input_path.read_text(encoding="utf-8")
    else:
        text = args.text

    if args.kind == "resume":
        skills = extract_resume_skills(text, api_key=settings.hf_api_key)
    else:
        skills = extract_job_skills(text, api_key=settings.hf_api_key)

    print(f"Extracted {len(skills)} skills:")
    for skill in skills:
        print(f" - {skill}")


def cmd_validate(args: argparse.Namespace, settings: Settings) -> None:
    data = _read_json(args.input)
    errors = validate_profile(data) if args.kind == "profile" else validate_job(data)
    if errors:
        print("Invalid:")
        for e in errors:
            print(f" - {e}")
        raise SystemExit(2)
    print("Valid")


def cmd_add_profile(args: argparse.Namespace, settings: Settings) -> None:
    data = _read_json(args.input)
    session = _open_session(settings)
    try:
        profile = add_profile(session, data)
    finally:
        session.close()
    print(f"Profile: {profile['id']} ({profile['email']})")
    print(f"Skills: {', '.join(profile['skills']) or '-'}")


def cmd_add_job(args: argparse.Namespace, settings: Settings) -> None:
    data = _read_json(args.input)
    session = _open_session(settings)
    try:
        if args.posted_by:
            owner = get_profile(session, email=args.posted_by)
            if owner is None:
                raise SystemExit(f"Profile not found: {args.posted_by}")
            data["posted_by"] = owner["id"]
        job = add_job(session, data)
    finally:
        session.close()
    print(f"Job: {job['id']} ({job['title']})")
    print(f"Skills: {', '.join(job['skills']) or '-'}")


def cmd_list(args: argparse.Namespace, settings: Settings) -> None:
    session = _open_session(settings)
    try:
        records = list_profiles(session) if args.kind == "profiles" else list_jobs(session)
    finally:
        session.close()

    if not records:
        print(f"No {args.kind} in {settings.db_path}.")
        return
    print(f"Found {len(records)} {args.kind} in {settings.db_path}:\n")
    for r in records:
        print(f"ID: {r['id']}")
        if args.kind == "profiles":
            print(f"  Name: {r['name']}")
            print(f"  Email: {r['email']}")
        else:
            print(f"  Title: {r['title']}")
            print(f"  Location: {r['location']}")
            print(f"  Status: {r['status']}")
        print(f"  Skills: {', '.join(r['skills']) or '-'}")
        print()


def cmd_suggest(args: argparse.Namespace, settings: Settings) -> None:
    session = _open_session(settings)
    try:
        profile = get_profile(session, email=args.email)
        if profile is None:
            raise SystemExit(f"Profile not found: {args.email}")
        result = build_suggestions(
            profile,
            jobs=list_jobs(session),
            profiles=list_profiles(session),
            kind=args.type,
        )
    finally:
        session.close()

    suggestions = result["suggestions"]
    if args.json:
        # Only the requested sections
        sections = {}
        if "jobs" in suggestions:
            sections["jobs"] = [
                {**s["job"], "match": s["match"].to_dict()}
                for s in suggestions["jobs"]
            ]
        if "connections" in suggestions:
            sections["connections"] = [
                {
                    "id": s["profile"]["id"],
                    "name": s["profile"]["name"],
                    "email": s["profile"]["email"],
                    "similarity": s["similarity"].to_dict(),
                    "reason": s["reason"],
                }
                for s in suggestions["connections"]
            ]
        for key in ("skills", "learning"):
            if key in suggestions:
                sections[key] = suggestions[key]
        _dump({"profile": result["profile"], "suggestions": sections})
        return

    summary = result["profile"]
    print(f"Suggestions for {summary['name']} ({summary['skill_count']} skills)")
    if "jobs" in suggestions:
        print("\nJobs:")
        for s in suggestions["jobs"]:
            print(f" - [{s['match'].score}] {s['job']['title']}: {s['match'].explanation}")
    if "connections" in suggestions:
        print("\nConnections:")
        for s in suggestions["connections"]:
            print(f" - [{s['similarity'].score}] {s['profile']['name']}: {s['reason']}")
    if "skills" in suggestions:
        print("\nSkills in demand:")
        for s in suggestions["skills"]:
            print(f" - {s['skill']}: {s['reason']}")
    if "learning" in suggestions:
        print("\nLearning:")
        for s in suggestions["learning"]:
            print(f" - {s['skill']} ({s['priority']}): {s['reason']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skillmatch", description="Skill matching and suggestions for job seekers")
    parser.add_argument("--version", action="store_true", help="Show version")
    parser.add_argument("--db", help="Path to SQLite database (or set SKILLMATCH_DB_PATH)")
    parser.add_argument("--log-level", help="Log level (or set SKILLMATCH_LOG_LEVEL)")
    parser.add_argument("--hf-api-key", help="Hugging Face API token (or set HF_API_KEY)")

    subparsers = parser.add_subparsers(dest="command")

    mat = subparsers.add_parser("match", help="Score candidate skills against a job's required skills")
    mat.add_argument("--candidate", required=True, help="Comma-separated candidate skills")
    mat.add_argument("--required", required=True, help="Comma-separated required skills")
    mat.add_argument("--json", action="store_true", help="Print the result as JSON")
    mat.set_defaults(func=cmd_match)

    sim = subparsers.add_parser("similarity", help="Jaccard similarity between two skill sets")
    sim.add_argument("--a", required=True, help="Comma-separated skills of the first person")
    sim.add_argument("--b", required=True, help="Comma-separated skills of the second person")
    sim.add_argument("--json", action="store_true", help="Print the result as JSON")
    sim.set_defaults(func=cmd_similarity)

    txt = subparsers.add_parser("text", help="Cosine similarity between two texts")
    txt.add_argument("--a", required=True, help="First text")
    txt.add_argument("--b", required=True, help="Second text")
    txt.set_defaults(func=cmd_text)

    ext = subparsers.add_parser("extract", help="Extract skills from a job description or resume text")
    src = ext.add_mutually_exclusive_group(required=True)
    src.add_argument("--text", help="Text to extract skills from")
    src.add_argument("--input", help="Path to a text file")
    ext.add_argument("--kind", choices=["job", "resume"], default="job", help="Source type (default: job)")
    ext.set_defaults(func=cmd_extract)

    val = subparsers.add_parser("validate", help="Validate a profile or job JSON")
    val.add_argument("--input", required=True, help="Path to JSON input")
    val.add_argument("--kind", required=True, choices=["profile", "job"], help="Record type")
    val.set_defaults(func=cmd_validate)

    adp = subparsers.add_parser("add-profile", help="Add a profile from JSON")
    adp.add_argument("--input", required=True, help="Path to profile JSON")
    adp.set_defaults(func=cmd_add_profile)

    adj = subparsers.add_parser("add-job", help="Add a job posting from JSON")
    adj.add_argument("--input", required=True, help="Path to job JSON")
    adj.add_argument("--posted-by", help="Email of the posting profile")
    adj.set_defaults(func=cmd_add_job)

    lst = subparsers.add_parser("list", help="List stored profiles or jobs")
    lst.add_argument("--kind", choices=["profiles", "jobs"], default="jobs", help="Record type (default: jobs)")
    lst.set_defaults(func=cmd_list)

    sug = subparsers.add_parser("suggest", help="Personalized suggestions for a profile")
    sug.add_argument("--email", required=True, help="Email of the profile")
    sug.add_argument("--type", choices=list(SUGGESTION_KINDS), default="all", help="Suggestion type (default: all)")
    sug.add_argument("--json", action="store_true", help="Print the result as JSON")
    sug.set_defaults(func=cmd_suggest)

    return parser


def main(argv=None):
    # Load .env if present (HF_API_KEY, SKILLMATCH_DB_PATH, etc.)
    load_env()
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print(__version__)
        return

    settings = Settings.from_env()
    if args.db:
        settings.db_path = Path(args.db)
    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.hf_api_key:
        settings.hf_api_key = args.hf_api_key

    reset_logger()
    logger = get_logger(level=settings.log_level, log_dir=settings.log_dir)

    if not hasattr(args, "func"):
        parser.print_help()
        return

    try:
        args.func(args, settings)
    except ValidationError as e:
        print("Invalid:", file=sys.stderr)
        for err in e.errors:
            print(f" - {err}", file=sys.stderr)
        raise SystemExit(2)
    except SkillmatchError as e:
        logger.error("Command failed", command=args.command, error=str(e))
        raise SystemExit(str(e))
    finally:
        logger.log_metrics_summary()


if __name__ == "__main__":
    main()
