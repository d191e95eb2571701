"""
Course Endpoints.

Educators publish courses; learners enroll through the split payment flow
(free courses enroll immediately).
"""

from typing import List

from fastapi import APIRouter, status

from alexandria.core.models.io import CourseCreate, CourseRead, EnrollmentRead, SplitInitResponse
from alexandria.server.services.deps import CourseDep, CurrentUserDep, EducatorDep, LedgerDep

router = APIRouter(tags=["courses"])


@router.post(
    "",
    response_model=CourseRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Course",
    description="Publish a course. Only educators may create courses.",
    responses={403: {"description": "Caller is not an educator"}},
)
async def create_course(payload: CourseCreate, educator: EducatorDep, courses: CourseDep) -> CourseRead:
    """
    Create a course.

    - **title**: Course title.
    - **description**: Optional long description.
    - **price**: Price in major currency units; `0` makes the course free.
    """
    course = await courses.create_course(educator, payload.title, payload.description, payload.price)
    return CourseRead.model_validate(course, from_attributes=True)


@router.get(
    "/enrollments/me",
    response_model=List[EnrollmentRead],
    summary="My Enrollments",
    description="The caller's active and completed enrollments.",
)
async def my_enrollments(learner: CurrentUserDep, courses: CourseDep) -> List[EnrollmentRead]:
    enrollments = await courses.my_enrollments(learner)
    return [EnrollmentRead.model_validate(e, from_attributes=True) for e in enrollments]


@router.get(
    "/{course_id}",
    response_model=CourseRead,
    summary="Get Course",
    responses={404: {"description": "Course not found"}},
)
async def get_course(course_id: int, courses: CourseDep) -> CourseRead:
    return CourseRead.model_validate(await courses.get_course(course_id), from_attributes=True)


@router.post(
    "/{course_id}/enroll",
    response_model=SplitInitResponse,
    summary="Enroll in Course",
    description="Start the split payment for a course, or enroll directly when the course is free.",
    responses={
        400: {"description": "Already enrolled, or the educator cannot receive payments"},
        404: {"description": "Course not found"},
        500: {"description": "Payment gateway error"},
    },
)
async def enroll(course_id: int, learner: CurrentUserDep, ledger: LedgerDep) -> SplitInitResponse:
    return SplitInitResponse.model_validate(await ledger.initialize_course_split(learner, course_id))
