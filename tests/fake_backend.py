"""In-memory stand-in for the job board REST API, served to the client over ASGI."""
import json
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone

from fastapi import APIRouter, FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse


class ApiFailure(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message


@dataclass
class BackendState:
    users: dict[str, dict] = field(default_factory=dict)
    tokens: dict[str, str] = field(default_factory=dict)
    jobs: list[dict] = field(default_factory=list)
    applications: list[dict] = field(default_factory=list)
    notifications: list[dict] = field(default_factory=list)
    job_queries: list[dict] = field(default_factory=list)
    last_register: dict | None = None
    last_profile_form: dict | None = None
    me_status: int | None = None
    next_id: int = 1

    def _id(self) -> int:
        value = self.next_id
        self.next_id += 1
        return value

    def add_user(self, email: str, password: str, role: str, first_name: str, last_name: str, **profile) -> str:
        """Create a user and return a valid token for them."""
        self.users[email] = {
            "id": self._id(),
            "email": email,
            "password": password,
            "role": role,
            "firstName": first_name,
            "lastName": last_name,
            "phone": profile.pop("phone", ""),
            "profile": profile,
        }
        return self.issue_token(email)

    def issue_token(self, email: str) -> str:
        token = f"token-{self.users[email]['id']}-{len(self.tokens)}"
        self.tokens[token] = email
        return token

    def revoke_tokens(self, email: str) -> None:
        self.tokens = {t: e for t, e in self.tokens.items() if e != email}

    def add_job(self, employer_email: str, **fields) -> dict:
        job = {
            "id": self._id(),
            "employerEmail": employer_email,
            "title": "Untitled",
            "description": "",
            "location": "Remote",
            "jobType": "full-time",
            "experienceLevel": None,
            "salaryMin": None,
            "salaryMax": None,
            "skills": [],
            "status": "active",
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        job.update(fields)
        self.jobs.append(job)
        return job

    def add_notification(self, email: str, **fields) -> dict:
        notification = {
            "id": self._id(),
            "userEmail": email,
            "type": "application_status_change",
            "title": "Update",
            "message": "",
            "isRead": False,
            "relatedType": None,
            "relatedId": None,
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        notification.update(fields)
        self.notifications.append(notification)
        return notification


def public_user(user: dict) -> dict:
    return {k: v for k, v in user.items() if k not in ("password", "profile")}


def create_app(state: BackendState) -> FastAPI:
    app = FastAPI(title="Fake Job Board API")
    router = APIRouter()

    @app.exception_handler(ApiFailure)
    async def api_failure_handler(request: Request, exc: ApiFailure):
        return JSONResponse(status_code=exc.status_code, content={"success": False, "message": exc.message})

    def current_user(request: Request, role: str | None = None) -> dict:
        header = request.headers.get("authorization", "")
        email = state.tokens.get(header.removeprefix("Bearer "))
        if email is None:
            raise ApiFailure(401, "Invalid or expired token")
        user = state.users[email]
        if role is not None and user["role"].lower().replace("jobseeker", "job_seeker") != role:
            raise ApiFailure(403, "Access denied")
        return user

    def find_job(job_id: int) -> dict:
        for job in state.jobs:
            if job["id"] == job_id:
                return job
        raise ApiFailure(404, "Job not found")

    def job_with_employer(job: dict) -> dict:
        employer = state.users.get(job["employerEmail"], {})
        company = employer.get("profile", {}).get("companyName")
        return {**job, "employer": {"employerProfile": {"companyName": company}}}

    def application_view(application: dict) -> dict:
        seeker = state.users[application["jobSeekerEmail"]]
        return {
            **application,
            "job": job_with_employer(find_job(application["jobId"])),
            "jobSeeker": {
                "email": seeker["email"],
                "jobSeekerProfile": {
                    "fullName": f"{seeker['firstName']} {seeker['lastName']}",
                    "phone": seeker["phone"],
                    **seeker["profile"],
                },
            },
        }

    # Auth

    @router.post("/auth/login")
    async def login(request: Request):
        body = await request.json()
        user = state.users.get(body.get("email"))
        if user is None or user["password"] != body.get("password"):
            raise ApiFailure(401, "Invalid credentials")
        return {"success": True, "data": {"token": state.issue_token(user["email"]), "user": public_user(user)}}

    @router.post("/auth/register", status_code=201)
    async def register(request: Request):
        body = await request.json()
        state.last_register = body
        if body["email"] in state.users:
            raise ApiFailure(400, "User already exists")
        profile = {}
        if body.get("companyName"):
            profile["companyName"] = body["companyName"]
        token = state.add_user(
            body["email"], body["password"], body["role"], body["firstName"], body["lastName"],
            phone=body.get("phone", ""), **profile,
        )
        return {"success": True, "data": {"token": token, "user": public_user(state.users[body["email"]])}}

    @router.get("/auth/me")
    async def me(request: Request):
        if state.me_status is not None:
            raise ApiFailure(state.me_status, "Forced failure")
        return {"success": True, "data": public_user(current_user(request))}

    # Jobs

    @router.get("/jobs")
    async def list_jobs(request: Request):
        params = dict(request.query_params)
        state.job_queries.append(params)
        page = int(params.get("page", 1))
        limit = int(params.get("limit", 10))

        jobs = state.jobs
        if "search" in params:
            jobs = [j for j in jobs if params["search"].lower() in j["title"].lower()]
        if "location" in params:
            jobs = [j for j in jobs if params["location"].lower() in j["location"].lower()]
        if "jobType" in params:
            jobs = [j for j in jobs if j["jobType"] == params["jobType"]]
        if "minSalary" in params:
            jobs = [j for j in jobs if (j["salaryMax"] or 0) >= int(params["minSalary"])]

        start = (page - 1) * limit
        return {
            "success": True,
            "data": {
                "jobs": [job_with_employer(j) for j in jobs[start:start + limit]],
                "pagination": {
                    "total": len(jobs),
                    "pages": math.ceil(len(jobs) / limit),
                    "page": page,
                    "limit": limit,
                },
            },
        }

    @router.get("/jobs/{job_id}")
    async def get_job(job_id: int):
        return {"success": True, "data": job_with_employer(find_job(job_id))}

    @router.post("/jobs", status_code=201)
    async def create_job(request: Request):
        user = current_user(request, role="employer")
        body = await request.json()
        job = state.add_job(user["email"], **body)
        return {"success": True, "data": job_with_employer(job)}

    @router.put("/jobs/{job_id}")
    async def update_job(job_id: int, request: Request):
        current_user(request, role="employer")
        job = find_job(job_id)
        job.update(await request.json())
        return {"success": True, "data": job_with_employer(job)}

    @router.delete("/jobs/{job_id}")
    async def delete_job(job_id: int, request: Request):
        current_user(request, role="employer")
        state.jobs.remove(find_job(job_id))
        return {"success": True, "message": "Job deleted"}

    # Applications

    @router.post("/applications", status_code=201)
    async def apply(request: Request):
        user = current_user(request, role="job_seeker")
        body = await request.json()
        job = find_job(int(body["jobId"]))
        if any(a["jobId"] == job["id"] and a["jobSeekerEmail"] == user["email"] for a in state.applications):
            raise ApiFailure(400, "You have already applied to this job")
        application = {
            "id": state._id(),
            "jobId": job["id"],
            "jobSeekerEmail": user["email"],
            "status": "pending",
            "coverLetter": body.get("coverLetter"),
            "createdAt": datetime.now(timezone.utc).isoformat(),
        }
        state.applications.append(application)
        return {"success": True, "data": application_view(application)}

    @router.get("/applications/my-applications")
    async def my_applications(request: Request):
        user = current_user(request, role="job_seeker")
        mine = [a for a in state.applications if a["jobSeekerEmail"] == user["email"]]
        return {"success": True, "data": [application_view(a) for a in mine]}

    @router.get("/applications/check/{job_id}")
    async def check_applied(job_id: int, request: Request):
        user = current_user(request, role="job_seeker")
        applied = any(a["jobId"] == job_id and a["jobSeekerEmail"] == user["email"] for a in state.applications)
        return {"success": True, "data": {"hasApplied": applied}}

    @router.put("/applications/{application_id}/status")
    async def update_status(application_id: int, request: Request):
        current_user(request, role="employer")
        body = await request.json()
        for application in state.applications:
            if application["id"] == application_id:
                application["status"] = body["status"]
                return {"success": True, "data": application_view(application)}
        raise ApiFailure(404, "Application not found")

    @router.delete("/applications/{application_id}")
    async def withdraw(application_id: int, request: Request):
        user = current_user(request, role="job_seeker")
        state.applications = [
            a for a in state.applications
            if not (a["id"] == application_id and a["jobSeekerEmail"] == user["email"])
        ]
        return {"success": True, "message": "Application withdrawn"}

    @router.get("/employer/jobs/{job_id}/applications")
    async def applications_for_job(job_id: int, request: Request):
        current_user(request, role="employer")
        received = [application_view(a) for a in state.applications if a["jobId"] == job_id]
        return {"success": True, "data": {"applications": received}}

    # Notifications

    def my_notifications(user: dict) -> list[dict]:
        return [n for n in state.notifications if n["userEmail"] == user["email"]]

    @router.get("/notifications")
    async def list_notifications(request: Request):
        mine = my_notifications(current_user(request))
        return {
            "success": True,
            "data": {
                "notifications": list(reversed(mine)),
                "unreadCount": sum(1 for n in mine if not n["isRead"]),
            },
        }

    @router.get("/notifications/unread-count")
    async def unread_count(request: Request):
        mine = my_notifications(current_user(request))
        return {"success": True, "data": {"unreadCount": sum(1 for n in mine if not n["isRead"])}}

    @router.put("/notifications/read-all")
    async def mark_all_read(request: Request):
        for notification in my_notifications(current_user(request)):
            notification["isRead"] = True
        return {"success": True}

    @router.put("/notifications/{notification_id}/read")
    async def mark_read(notification_id: int, request: Request):
        for notification in my_notifications(current_user(request)):
            if notification["id"] == notification_id:
                notification["isRead"] = True
                return {"success": True}
        raise ApiFailure(404, "Notification not found")

    @router.delete("/notifications/{notification_id}")
    async def delete_notification(notification_id: int, request: Request):
        user = current_user(request)
        state.notifications = [
            n for n in state.notifications
            if not (n["id"] == notification_id and n["userEmail"] == user["email"])
        ]
        return {"success": True}

    # Profile

    @router.get("/profile")
    async def get_profile(request: Request):
        user = current_user(request)
        return {"success": True, "data": {**public_user(user), **user["profile"]}}

    @router.put("/profile")
    async def update_profile(request: Request):
        user = current_user(request)
        form = dict(await request.form())
        state.last_profile_form = form
        if "skills" in form:
            form["skills"] = json.loads(form["skills"])
        user["profile"].update({k: v for k, v in form.items() if k not in ("name", "email", "phone")})
        return {"success": True, "data": {**public_user(user), **user["profile"]}}

    @router.post("/profile/resume")
    async def upload_resume(request: Request, resume: UploadFile = File(...)):
        user = current_user(request, role="job_seeker")
        content = await resume.read()
        url = f"/uploads/resumes/{resume.filename}"
        user["profile"]["resumeUrl"] = url
        return {"success": True, "data": {"resumeUrl": url, "size": len(content)}}

    app.include_router(router, prefix="/api")
    return app
