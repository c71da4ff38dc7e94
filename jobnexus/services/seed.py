"""Demo data: a handful of seekers, employers, listings and applications."""

import logging
from datetime import timedelta

from jobnexus.services.auth import hash_password
from jobnexus.services.storage import Storage, utcnow

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"

DEMO_USERS = [
    {"username": "johndoe", "email": "john@example.com", "name": "John Doe", "user_type": "seeker"},
    {"username": "janedoe", "email": "jane@example.com", "name": "Jane Doe", "user_type": "seeker"},
    {"username": "mikebrown", "email": "mike@example.com", "name": "Mike Brown", "user_type": "seeker"},
    {"username": "techcorp", "email": "hr@techcorp.com", "name": "Tech Corporation", "user_type": "employer"},
    {"username": "globalsys", "email": "careers@globalsys.com", "name": "Global Systems", "user_type": "employer"},
    {"username": "creativeco", "email": "jobs@creativeco.com", "name": "Creative Co.", "user_type": "employer"},
    {"username": "admin", "email": "admin@jobnexus.com", "name": "Administrator", "user_type": "admin"},
]

SEEKER_PROFILES = {
    "johndoe": {
        "title": "Senior Software Engineer",
        "skills": ["JavaScript", "React", "Node.js", "TypeScript"],
        "experience": "5+ years",
        "education": "Bachelor of Computer Science",
        "location": "San Francisco, CA",
        "bio": "Experienced software engineer with a passion for building scalable web applications",
    },
    "janedoe": {
        "title": "UX/UI Designer",
        "skills": ["UI Design", "Figma", "Adobe XD", "User Research"],
        "experience": "3 years",
        "education": "Bachelor of Fine Arts",
        "location": "New York, NY",
        "bio": "Creative designer focused on building intuitive and beautiful user experiences",
    },
    "mikebrown": {
        "title": "Data Scientist",
        "skills": ["Python", "Machine Learning", "SQL", "Data Visualization"],
        "experience": "2 years",
        "education": "Master of Data Science",
        "location": "Boston, MA",
        "bio": "Data scientist with a background in predictive analytics and machine learning",
    },
}

EMPLOYER_PROFILES = {
    "techcorp": {
        "company_name": "Tech Corporation",
        "industry": "Technology",
        "location": "San Francisco, CA",
        "website": "https://techcorp.example.com",
        "description": "Leading technology company specialized in cloud solutions",
        "logo": "https://via.placeholder.com/150?text=TechCorp",
    },
    "globalsys": {
        "company_name": "Global Systems",
        "industry": "IT Services",
        "location": "Chicago, IL",
        "website": "https://globalsys.example.com",
        "description": "Global IT services and consulting company",
        "logo": "https://via.placeholder.com/150?text=GlobalSys",
    },
    "creativeco": {
        "company_name": "Creative Co.",
        "industry": "Design & Marketing",
        "location": "Austin, TX",
        "website": "https://creativeco.example.com",
        "description": "Creative agency specialized in branding and digital marketing",
        "logo": "https://via.placeholder.com/150?text=CreativeCo",
    },
}

# (employer username, listing fields, days until the deadline)
JOB_LISTINGS = [
    ("techcorp", {
        "title": "Frontend Developer",
        "description": "Looking for an experienced Frontend Developer to join our team and help build "
                       "responsive and scalable web applications.",
        "location": "San Francisco, CA",
        "salary_min": 90000,
        "salary_max": 120000,
        "job_type": "full-time",
        "skills": ["JavaScript", "React", "HTML", "CSS", "TypeScript"],
    }, 30),
    ("techcorp", {
        "title": "Backend Engineer",
        "description": "Seeking a skilled Backend Engineer to develop and maintain our server-side "
                       "applications and databases.",
        "location": "San Francisco, CA (Remote OK)",
        "salary_min": 100000,
        "salary_max": 140000,
        "job_type": "full-time",
        "skills": ["Node.js", "Express", "Databases", "RESTful API", "AWS", "Azure", "GCP"],
    }, 45),
    ("globalsys", {
        "title": "DevOps Engineer",
        "description": "Join our DevOps team to help automate, deploy, and maintain our cloud infrastructure.",
        "location": "Chicago, IL",
        "salary_min": 110000,
        "salary_max": 150000,
        "job_type": "full-time",
        "skills": ["CI/CD", "Docker", "Kubernetes", "Terraform", "CloudFormation", "Networking", "Security"],
    }, 60),
    ("creativeco", {
        "title": "UI/UX Designer",
        "description": "Creative Co. is looking for a talented UI/UX Designer to create beautiful and "
                       "intuitive interfaces for our clients.",
        "location": "Austin, TX (Hybrid)",
        "salary_min": 80000,
        "salary_max": 110000,
        "job_type": "full-time",
        "skills": ["UI Design", "UX Design", "Figma", "Adobe XD", "User Research", "Accessibility"],
    }, 30),
    ("globalsys", {
        "title": "Data Analyst (Part-time)",
        "description": "Looking for a part-time Data Analyst to help interpret data and provide insights "
                       "for business decisions.",
        "location": "Remote",
        "salary_min": 40,
        "salary_max": 50,
        "job_type": "part-time",
        "skills": ["Data Analysis", "SQL", "Excel", "Data Visualization", "Analytics"],
    }, 15),
    ("creativeco", {
        "title": "Social Media Coordinator",
        "description": "Creative Co. needs a Social Media Coordinator to manage and grow our clients' "
                       "social media presence.",
        "location": "Austin, TX",
        "salary_min": 50000,
        "salary_max": 65000,
        "job_type": "full-time",
        "skills": ["Social Media", "Content Creation", "Analytics", "Digital Marketing"],
    }, 20),
]

# (seeker username, job title, cover letter)
JOB_APPLICATIONS = [
    ("johndoe", "Frontend Developer",
     "I am excited to apply for the Frontend Developer position at Tech Corporation. With my extensive "
     "experience in React and JavaScript, I believe I would be a great fit for your team."),
    ("janedoe", "Frontend Developer",
     "As an experienced frontend developer with a background in design, I can bring a unique perspective "
     "to the Frontend Developer role."),
    ("johndoe", "DevOps Engineer",
     "I'm interested in the DevOps Engineer position, as I have extensive experience with CI/CD pipelines "
     "and cloud infrastructure."),
    ("janedoe", "UI/UX Designer",
     "I am writing to express my interest in the UI/UX Designer position at Creative Co. With my background "
     "in design and user research, I believe I would be a valuable addition to your team."),
    ("mikebrown", "Data Analyst (Part-time)",
     "I am applying for the Data Analyst position. With my background in data science and analytics, I am "
     "confident in my ability to provide valuable insights for your business decisions."),
]


def seed_demo_data(storage: Storage) -> dict[str, int]:
    """Populate ``storage`` with the demo set, skipping records that already exist.

    Returns how many records of each kind were created by this call.
    """
    created = {"users": 0, "seeker_profiles": 0, "employer_profiles": 0, "job_listings": 0, "job_applications": 0}

    users = {}
    for fields in DEMO_USERS:
        user = storage.get_user_by_username(fields["username"])
        if user is None:
            user = storage.create_user({**fields, "password": hash_password(DEMO_PASSWORD)})
            created["users"] += 1
            logger.info("Created user: %s", user.username)
        users[user.username] = user

    for username, fields in SEEKER_PROFILES.items():
        user_id = users[username].id
        if storage.get_seeker_profile(user_id) is None:
            storage.create_seeker_profile({**fields, "user_id": user_id})
            created["seeker_profiles"] += 1

    for username, fields in EMPLOYER_PROFILES.items():
        user_id = users[username].id
        if storage.get_employer_profile(user_id) is None:
            storage.create_employer_profile({**fields, "user_id": user_id})
            created["employer_profiles"] += 1

    jobs = {}
    for username, fields, deadline_days in JOB_LISTINGS:
        employer_id = users[username].id
        existing = [
            job for job in storage.get_job_listings(include_inactive=True)
            if job.employer_id == employer_id and job.title == fields["title"]
        ]
        if existing:
            jobs[fields["title"]] = existing[0]
            continue
        job = storage.create_job_listing({
            **fields,
            "employer_id": employer_id,
            "application_deadline": utcnow() + timedelta(days=deadline_days),
        })
        jobs[job.title] = job
        created["job_listings"] += 1
        logger.info("Created job listing: %s", job.title)

    for username, title, cover_letter in JOB_APPLICATIONS:
        seeker_id = users[username].id
        job_id = jobs[title].id
        if any(a.job_id == job_id for a in storage.get_job_applications_by_seeker(seeker_id)):
            continue
        storage.create_job_application({"job_id": job_id, "seeker_id": seeker_id, "cover_letter": cover_letter})
        created["job_applications"] += 1

    logger.info("Demo data seeded: %s", created)
    return created
