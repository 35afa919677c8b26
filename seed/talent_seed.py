"""
Demo data for the job board.

Seeds 25 jobs (every third one archived), a pool of candidates with a
consistent stage history, and three assessments of ten questions each.
Runs only against an empty jobs table.
"""

import logging
import random
from datetime import datetime, timedelta
from typing import List, Optional

from sqlmodel import Session

from assessment import QuestionSpec, check_question_set
from models.assessment import Assessment
from models.candidate import Candidate, CandidateStage
from models.job import Job, JobStatus
from models.question import Question
from models.stage_transition import StageTransition
from repositories import JobRepository
from services.job_service import slugify
from utils.database import get_engine, init_db

logger = logging.getLogger(__name__)

JOB_TITLES = [
    "Senior Frontend Developer", "Backend Engineer", "UX Designer",
    "Product Manager", "DevOps Engineer", "Full Stack Developer",
    "Data Scientist", "QA Engineer", "Mobile Developer", "Marketing Manager",
    "Sales Representative", "HR Manager", "Business Analyst",
    "Security Engineer", "Cloud Architect", "AI/ML Engineer",
    "Content Manager", "Graphic Designer", "Technical Writer",
    "Customer Success Manager", "Accountant", "Operations Manager",
    "UI Designer", "System Administrator", "Network Engineer",
]

CANDIDATE_NAMES = [
    "Emma Thompson", "James Wilson", "Olivia Martinez", "Michael Brown",
    "Sophia Garcia", "William Jones", "Isabella Davis", "Benjamin Miller",
    "Mia Anderson", "Elijah Taylor", "Charlotte Moore", "Henry Jackson",
    "Amelia White", "Lucas Harris", "Harper Clark", "Alexander Lewis",
    "Evelyn Robinson", "Mason Walker", "Abigail Hall", "Logan Young",
]

ALL_TAGS = [
    "Remote", "Full-time", "Part-time", "Contract", "Urgent",
    "Tech", "Design", "Marketing", "Sales", "Management",
]

# Happy path through the pipeline; "rejected" can end any prefix of it
PIPELINE = ["applied", "screen", "tech", "offer", "hired"]

QUESTION_TYPES = ["single-choice", "multi-choice", "short-text", "long-text", "numeric", "file"]

SAMPLE_QUESTIONS = {
    "single-choice": [
        "Do you have professional experience in this field?",
        "Are you willing to relocate?",
        "Do you have a valid work permit?",
    ],
    "multi-choice": [
        "Which programming languages do you know?",
        "What are your communication preferences?",
        "Which benefits are important to you?",
    ],
    "short-text": [
        "Years of experience",
        "Current location",
        "Preferred salary range",
    ],
    "long-text": [
        "Tell us about yourself",
        "Why are you interested in this position?",
        "Describe a challenging project you worked on",
    ],
    "numeric": [
        "Years of experience",
        "Number of projects completed",
        "Team size you managed",
    ],
}

# Jobs (by index into JOB_TITLES) that get an assessment
ASSESSED_JOB_INDEXES = [4, 9, 14]
QUESTIONS_PER_ASSESSMENT = 10
SEED_USER_ID = "seed"


def generate_email(name: str) -> str:
    return name.lower().replace(" ", ".") + "@example.com"


def generate_tags(rng: random.Random) -> List[str]:
    tags = []
    for _ in range(rng.randint(1, 3)):
        tag = rng.choice(ALL_TAGS)
        if tag not in tags:
            tags.append(tag)
    return tags


def generate_options(count: int = 4) -> List[dict]:
    texts = ["Option A", "Option B", "Option C", "Option D"]
    return [{"id": i + 1, "text": text, "value": i + 1} for i, text in enumerate(texts[:count])]


def build_questions(assessment_id: str) -> List[QuestionSpec]:
    """
    Ten questions cycling through every type.

    From the fifth question on, a question depends on the one four places
    earlier when that one can produce a matchable answer: a single-choice
    answer of 1 (Option A) or a short-text answer of "Yes".
    """
    specs: List[QuestionSpec] = []
    for i in range(QUESTIONS_PER_ASSESSMENT):
        question_type = QUESTION_TYPES[i % len(QUESTION_TYPES)]
        samples = SAMPLE_QUESTIONS.get(question_type, [])
        label = samples[i % len(samples)] if samples else f"Question {i + 1}"

        validation = {}
        if question_type == "numeric":
            validation = {"min": 0, "max": 50}
        elif question_type == "short-text":
            validation = {"max_length": 100}
        elif question_type == "long-text":
            validation = {"max_length": 500}

        conditional = None
        if i > 3:
            parent = specs[i - 4]
            if parent.type_name == "single-choice":
                conditional = {"depends_on": parent.id, "condition": "equals", "value": 1}
            elif parent.type_name == "short-text":
                conditional = {"depends_on": parent.id, "condition": "equals", "value": "Yes"}

        specs.append(QuestionSpec(
            id=f"{assessment_id}-q{i}",
            order=i,
            type=question_type,
            label=label,
            required=i % 3 == 0,
            options=generate_options(4) if question_type in ("single-choice", "multi-choice") else None,
            placeholder="Enter your answer...",
            validation=validation,
            conditional=conditional,
        ))
    return specs


def _stage_path(rng: random.Random) -> List[str]:
    """Stages a seeded candidate passes through, starting at applied."""
    path = PIPELINE[:rng.randint(1, len(PIPELINE))]
    if path[-1] != CandidateStage.HIRED.value and rng.random() < 0.2:
        path.append(CandidateStage.REJECTED.value)
    return path


def seed_talent_data(
    session: Optional[Session] = None,
    candidate_count: int = 1000,
    random_seed: Optional[int] = 42,
) -> bool:
    """
    Seed jobs, candidates, stage transitions and assessments.

    Returns:
        False when the database already holds jobs, True after seeding
    """
    if session is None:
        init_db()
        with Session(get_engine()) as own_session:
            return seed_talent_data(own_session, candidate_count, random_seed)

    if JobRepository(session).count() > 0:
        logger.info("Jobs already present, skipping seed")
        return False

    rng = random.Random(random_seed)
    now = datetime.utcnow()

    jobs = []
    for index, title in enumerate(JOB_TITLES):
        jobs.append(Job(
            title=title,
            slug=slugify(title),
            status=JobStatus.ARCHIVED.value if index % 3 == 0 else JobStatus.ACTIVE.value,
            tags=generate_tags(rng),
            order=index,
            description=f"We are hiring a {title}.",
            created_at=now - timedelta(seconds=rng.randint(0, 10_000_000)),
            updated_at=now,
        ))
    session.add_all(jobs)
    session.flush()
    logger.info(f"Seeded {len(jobs)} jobs")

    transitions = 0
    for i in range(candidate_count):
        name = f"{CANDIDATE_NAMES[i % len(CANDIDATE_NAMES)]} {i}"
        path = _stage_path(rng)
        created = now - timedelta(seconds=rng.randint(0, 10_000_000))
        candidate = Candidate(
            name=name,
            email=generate_email(name),
            phone=f"+1{rng.randint(1_000_000_000, 9_999_999_999)}",
            job_id=rng.choice(jobs).id,
            stage=path[-1],
            created_at=created,
            updated_at=created,
        )
        session.add(candidate)

        history = [("applied", "applied", "Application submitted")]
        history += [(src, dst, "") for src, dst in zip(path, path[1:])]
        for step, (from_stage, to_stage, notes) in enumerate(history):
            session.add(StageTransition(
                candidate_id=candidate.id,
                from_stage=from_stage,
                to_stage=to_stage,
                timestamp=created + timedelta(hours=step * 24),
                user_id=SEED_USER_ID,
                notes=notes,
            ))
            transitions += 1
    session.flush()
    logger.info(f"Seeded {candidate_count} candidates and {transitions} stage transitions")

    for index in ASSESSED_JOB_INDEXES:
        job = jobs[index]
        assessment = Assessment(
            job_id=job.id,
            title=f"Assessment for {job.title}",
            description="Please complete this assessment to proceed with your application.",
        )
        session.add(assessment)
        session.flush()

        specs = build_questions(assessment.id)
        problems = check_question_set(specs)
        if problems:
            raise ValueError(f"Seed questions are inconsistent: {'; '.join(problems)}")
        session.add_all([Question(assessment_id=assessment.id, **spec.to_storage()) for spec in specs])
    logger.info(f"Seeded {len(ASSESSED_JOB_INDEXES)} assessments with {QUESTIONS_PER_ASSESSMENT} questions each")

    session.commit()
    return True
