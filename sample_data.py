"""Built-in demo batch: ten candidates with deliberate score disparities."""

from __future__ import annotations

from models import ResumeRecord

SAMPLE_RESUMES: tuple[ResumeRecord, ...] = (
    ResumeRecord(
        resume_id="1",
        name="John Smith",
        text=(
            "Experienced software engineer who led multiple teams and achieved significant performance "
            "improvements. Delivered complex projects and exceeded expectations consistently."
        ),
        match_score=88,
    ),
    ResumeRecord(
        resume_id="2",
        name="Maria Garcia",
        text=(
            "Collaborative project manager who supported cross-functional teams and helped coordinate "
            "successful product launches. Contributed to team success through careful planning."
        ),
        match_score=85,
    ),
    ResumeRecord(
        resume_id="3",
        name="David Johnson",
        text=(
            "Results-driven sales executive who dominated the market and outperformed competitors. "
            "Won multiple awards and beat all quarterly targets."
        ),
        match_score=92,
    ),
    ResumeRecord(
        resume_id="4",
        name="Keisha Washington",
        text=(
            "Dedicated marketing specialist who collaborated with diverse teams and facilitated successful "
            "campaigns. Mentored junior staff and supported organizational goals."
        ),
        match_score=64,
    ),
    ResumeRecord(
        resume_id="5",
        name="Jennifer Chen",
        text=(
            "Analytical data scientist who contributed to machine learning initiatives and participated in "
            "research projects. Helped develop innovative solutions."
        ),
        match_score=89,
    ),
    ResumeRecord(
        resume_id="6",
        name="Michael Rodriguez",
        text=(
            "Accomplished finance director who spearheaded cost reduction initiatives and drove revenue "
            "growth. Executed strategic plans and conquered market challenges."
        ),
        match_score=90,
    ),
    ResumeRecord(
        resume_id="7",
        name="Aisha Jackson",
        text=(
            "Caring human resources manager who nurtured employee development and supported workplace "
            "diversity initiatives. Facilitated team building and mentored staff."
        ),
        match_score=61,
    ),
    ResumeRecord(
        resume_id="8",
        name="Robert Kim",
        text=(
            "Innovative product manager who pioneered new features and led development teams. Achieved "
            "breakthrough results and delivered cutting-edge solutions."
        ),
        match_score=87,
    ),
    ResumeRecord(
        resume_id="9",
        name="Lisa Martinez",
        text=(
            "Thoughtful UX designer who collaborated with stakeholders and helped create user-friendly "
            "interfaces. Contributed creative solutions and supported design teams."
        ),
        match_score=82,
    ),
    ResumeRecord(
        resume_id="10",
        name="James Thompson",
        text=(
            "Competitive business analyst who exceeded performance metrics and dominated market analysis. "
            "Won recognition for outstanding achievements and aggressive growth strategies."
        ),
        match_score=91,
    ),
)
