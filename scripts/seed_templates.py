"""
Seed the system user and the default prompt templates.

Existing templates with the same name are left untouched, so the script can
be re-run safely.
"""
import asyncio
import os

from promptchat.infrastructure.database import get_session, init_db
from promptchat.modules.templates import (
    TemplateAlreadyExistsError,
    TemplateCategory,
    TemplateCreateInput,
    TemplateService,
)
from promptchat.modules.users import UserCreateInput, UserRole, UserService

SYSTEM_EMAIL = os.environ.get("SYSTEM_USER_EMAIL", "system@example.com")
SYSTEM_PASSWORD = os.environ.get("SYSTEM_USER_PASSWORD", "System12345")

DEFAULT_TEMPLATES = [
    TemplateCreateInput(
        name="Rural Health HR Analysis Assistant",
        description=(
            "Comprehensive HR analysis for rural health institutions, with a personalised "
            "diagnosis and strategic recommendations."
        ),
        template="""Analyze the following employee data: {data}.
Produce a detailed report covering the four key dimensions:
1. Job satisfaction and motivation.
2. Risk of leaving for urban or private centres.
3. Competency gaps against the health role profile.
4. Participation in institutional care-improvement processes.

**Expected response format:**
- EMPLOYEE: Name or ID.
- ROLE: Current health role.
- ANALYSIS DATE: Date of the report.
- OVERALL DIAGNOSIS: Risk level (LOW/MEDIUM/HIGH) and status in 1-2 lines.
- ANALYSIS BY DIMENSION:
  • Satisfaction and motivation: current level /10, trend and key factors.
  • Attrition risk: LOW/MEDIUM/HIGH probability and associated factors.
  • Competency gaps: critical gaps, impact and last training.
  • Institutional participation: engagement level and areas to improve.
- RECOMMENDATIONS: Three prioritised actions.
- TIMELINE: Short term (1-4 weeks), medium term (1-3 months) and suggested follow-up.""",
        system_instructions="""You are an assistant specialised in human resources analysis for rural health institutions. You produce personalised diagnoses and recommendations that account for budget limits, seasonal factors and the rural context. You analyse surveys, performance, care metrics, training records and feedback, correlating quantitative and qualitative data.
Keep information confidential, avoid bias, ground the analysis in objective data, suggest verification with coordinators and define clear follow-up metrics.""",
        category=TemplateCategory.HUMAN_RESOURCES_HEALTH.value,
        tags=["hr", "rural health", "diagnosis", "analysis", "recommendations", "talent management"],
        is_default=True,
    ),
    TemplateCreateInput(
        name="Rural Healthcare Quality Analysis",
        description=(
            "Evaluates quality-of-care indicators, identifies improvement areas and proposes "
            "strategies to optimise health services in rural settings."
        ),
        template="""Analyze the following clinical and care data: {data}.
Produce a comprehensive report that evaluates service quality and proposes improvements, covering:
1. Clinical outcomes and patient recovery rates.
2. Patient and family satisfaction.
3. Efficiency of care times and shift management.
4. Reported incidents and medical errors.
5. Compliance with biosafety protocols and clinical guidelines.

**Expected response format:**
- ANALYSIS DATE: Date of the report.
- EXECUTIVE SUMMARY: Overall state of care quality.
- KEY INDICATORS: Recovery, readmission, mortality and protocol adherence rates.
- PATIENT SATISFACTION: Overall percentage, trends and notable comments.
- DETECTED RISKS: Factors that harm quality.
- RECOMMENDATIONS: Concrete actions to improve care.
- IMPROVEMENT PLAN: Short, medium and long term.""",
        system_instructions="""You are an expert analyst in quality of care and hospital management in rural contexts. You identify improvement opportunities and propose strategies to optimise health care. You analyse satisfaction surveys, recovery, readmission and complication rates, care times, shift management, clinical incidents and protocol compliance.
Prioritise patient safety and continuity of service, fit recommendations to the available resources, and base them on national and international standards.""",
        category=TemplateCategory.HEALTHCARE_QUALITY.value,
        tags=[
            "care quality",
            "rural health",
            "clinical indicators",
            "patient satisfaction",
            "continuous improvement",
            "hospital management",
        ],
        is_default=True,
    ),
]


async def seed_templates():
    await init_db()

    async for db in get_session():
        users = UserService.with_session(db)
        system_user = await users.get_by_email(SYSTEM_EMAIL)
        if system_user is None:
            system_user = await users.register(
                UserCreateInput(
                    name="System User",
                    email=SYSTEM_EMAIL,
                    password=SYSTEM_PASSWORD,
                    role=UserRole.SYSTEM.value,
                )
            )
            print(f"System user created: {SYSTEM_EMAIL}")
        else:
            print(f"System user already exists: {SYSTEM_EMAIL}")

        templates = TemplateService.with_session(db)
        created = 0
        for payload in DEFAULT_TEMPLATES:
            try:
                await templates.create_template(payload, created_by=system_user.id)
            except TemplateAlreadyExistsError:
                print(f"Template already exists, skipped: {payload.name}")
                continue
            created += 1

        print("=" * 50)
        print(f"Seeding complete, templates created: {created}")
        print("=" * 50)


if __name__ == "__main__":
    asyncio.run(seed_templates())
