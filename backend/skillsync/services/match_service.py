"""
Skill-overlap scoring between a candidate and a job.

A job skill counts as matched when it contains, or is contained in, any of the
candidate's skills. "react" matches "react native" and "node" matches
"node.js". The looseness is intentional.
"""
import math


def normalize_skills(value) -> list[str]:
    """Lower-case and trim a skill list. Anything unusable yields an empty list."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, (list, tuple)):
        return []
    skills = []
    for item in value:
        if not isinstance(item, str):
            continue
        skill = item.strip().lower()
        if skill:
            skills.append(skill)
    return skills


def is_skill_matched(job_skill: str, user_skills: list[str]) -> bool:
    return any(job_skill in us or us in job_skill for us in user_skills)


def matched_skills(user_skills, job_skills) -> list[str]:
    users = normalize_skills(user_skills)
    return [s for s in normalize_skills(job_skills) if is_skill_matched(s, users)]


def compute_match_percentage(user_skills, job_skills) -> int:
    """Integer 0-100: share of the job's required skills the candidate covers."""
    required = normalize_skills(job_skills)
    if not required:
        return 0
    matched = matched_skills(user_skills, required)
    # Half rounds up, so 1 of 8 scores 13 rather than banker's 12
    return int(math.floor(len(matched) / len(required) * 100 + 0.5))
