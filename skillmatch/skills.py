"""
Keyword-based skill extraction for job descriptions and resumes.

Keyword hits come from a fixed catalog of technology and methodology
names. When a Hugging Face API key is available, named entities from
the NER model are merged in after the keyword hits.
"""

import re
from typing import Dict, List, Optional, Pattern

from .errors import EntityServiceError, ValidationError
from .logger import get_logger
from .ner import extract_entities
from .normalize import dedupe_skills

JOB_SKILL_LIMIT = 12
JOB_COMBINED_LIMIT = 15
RESUME_SKILL_LIMIT = 25
MIN_DESCRIPTION_LENGTH = 10

SKILL_KEYWORDS: Dict[str, List[str]] = {
    "Programming Languages": [
        "JavaScript", "TypeScript", "Python", "Java", "SQL", "C++", "C#", "C",
        "PHP", "Ruby", "Go", "Rust", "Swift", "Kotlin", "Scala", "R", "MATLAB",
        "Perl", "Dart", "Elixir", "Haskell", "Clojure", "Objective-C",
    ],
    "Frontend": [
        "React", "Vue.js", "Vue", "Angular", "Svelte", "Next.js", "Nuxt.js",
        "jQuery", "HTML", "CSS", "SCSS", "SASS", "Less", "TailwindCSS",
        "Tailwind CSS", "Bootstrap", "Material-UI", "Chakra UI",
        "Styled Components", "Webpack", "Vite", "Parcel",
    ],
    "Backend": [
        "Node.js", "Express", "Express.js", "Django", "Flask", "FastAPI",
        "Spring Boot", "Spring", "Laravel", "Ruby on Rails", "ASP.NET",
        "NestJS", "Koa.js", "Hapi.js", "Gin", "Echo", "Fiber",
    ],
    "Databases": [
        "MongoDB", "PostgreSQL", "MySQL", "SQLite", "Redis", "Elasticsearch",
        "Cassandra", "DynamoDB", "Firebase", "Supabase", "PlanetScale",
        "CockroachDB", "Neo4j", "InfluxDB", "Oracle", "SQL Server", "MariaDB",
        "CouchDB",
    ],
    "Cloud & DevOps": [
        "AWS", "Azure", "GCP", "Google Cloud", "Heroku", "Vercel", "Netlify",
        "DigitalOcean", "Docker", "Kubernetes", "Jenkins", "GitLab CI",
        "GitHub Actions", "Terraform", "Ansible", "Chef", "Puppet", "Vagrant",
        "Nginx", "Apache", "Linux", "Ubuntu", "CentOS", "RHEL",
    ],
    "Mobile": [
        "React Native", "Flutter", "iOS", "Android", "Xamarin", "Ionic",
        "Cordova", "PhoneGap",
    ],
    "Data Science & AI": [
        "Machine Learning", "Deep Learning", "TensorFlow", "PyTorch",
        "Scikit-learn", "Pandas", "NumPy", "Jupyter", "Tableau", "Power BI",
        "Apache Spark", "Hadoop", "Kafka", "Airflow", "Data Analysis",
        "Data Science", "Artificial Intelligence", "Neural Networks", "NLP",
    ],
    "Web": [
        "REST API", "GraphQL", "gRPC", "WebSocket", "JSON", "XML", "AJAX",
        "WebRTC", "Progressive Web Apps", "PWA", "Service Workers",
    ],
    "Design & UI/UX": [
        "Figma", "Adobe XD", "Sketch", "Photoshop", "Illustrator", "InVision",
        "Principle", "Framer", "UI/UX", "User Experience", "User Interface",
        "Wireframing", "Prototyping", "Responsive Design", "Mobile First",
        "Accessibility", "WCAG",
    ],
    "Testing": [
        "Jest", "Cypress", "Selenium", "Playwright", "Mocha", "Chai",
        "Jasmine", "PHPUnit", "JUnit", "Pytest", "Unit Testing",
        "Integration Testing", "E2E Testing", "Test Automation", "TDD", "BDD",
    ],
    "Tools": [
        "Git", "GitHub", "GitLab", "Bitbucket", "SVN", "Mercurial", "Jira",
        "Confluence", "Slack", "Discord", "VS Code", "Visual Studio",
        "IntelliJ", "Eclipse", "Postman", "Insomnia",
    ],
    "Methodologies": [
        "Agile", "Scrum", "Kanban", "DevOps", "CI/CD", "Microservices",
        "API Development", "Database Design", "System Design",
        "Software Architecture", "Design Patterns", "Clean Code",
        "SOLID Principles", "Domain Driven Design", "Event Sourcing",
    ],
    "Security & Blockchain": [
        "OAuth", "JWT", "SAML", "SSL/TLS", "HTTPS", "Cybersecurity",
        "Information Security", "Penetration Testing", "Ethical Hacking",
        "Cryptography", "Blockchain", "Ethereum", "Solidity", "Web3",
        "Smart Contracts", "DeFi", "NFT", "Bitcoin",
    ],
    "Business & Soft Skills": [
        "Project Management", "Team Leadership", "Communication",
        "Problem Solving", "Critical Thinking", "Analytical Skills",
        "Time Management", "Mentoring", "Code Review", "Technical Writing",
        "Documentation", "Presentation Skills",
    ],
    "Other": [
        "Solr", "RabbitMQ", "Apache Kafka", "Socket.io", "Three.js", "D3.js",
        "Chart.js", "Mapbox", "Stripe", "PayPal", "Twilio", "SendGrid",
        "Shopify", "WordPress", "Drupal", "Magento", "Salesforce", "HubSpot",
        "Google Analytics",
    ],
}


def all_keywords() -> List[str]:
    """Every catalog entry once, in category order."""
    return dedupe_skills(
        keyword for keywords in SKILL_KEYWORDS.values() for keyword in keywords
    )


def _keyword_pattern(keyword: str) -> Pattern:
    # Whole-term only: "R" must not hit inside "React", "Java" not inside "JavaScript"
    return re.compile(
        r"(?<![A-Za-z0-9_])" + re.escape(keyword) + r"(?![A-Za-z0-9_])",
        re.IGNORECASE,
    )


_PATTERNS = [(keyword, _keyword_pattern(keyword)) for keyword in all_keywords()]


def extract_skills_with_keywords(text: Optional[str], limit: Optional[int] = None) -> List[str]:
    """
    Catalog entries that occur in text, in catalog order.

    Args:
        text: Job description or resume text
        limit: Maximum number of skills to return (None = no limit)

    Returns:
        Skills in the catalog's display casing
    """
    if not text:
        return []
    found = [keyword for keyword, pattern in _PATTERNS if pattern.search(text)]
    if limit is not None:
        found = found[:limit]
    return found


def extract_skills(
    text: Optional[str],
    limit: int = JOB_COMBINED_LIMIT,
    api_key: Optional[str] = None,
) -> List[str]:
    """
    Keyword extraction, enriched with NER entities when an API key is set.

    A failing entity service never fails the extraction; keyword hits
    are returned on their own.
    """
    logger = get_logger()
    keywords = extract_skills_with_keywords(text)
    if not api_key or not text:
        return keywords[:limit]

    try:
        entities = extract_entities(text, api_key)
    except EntityServiceError as e:
        logger.warning("Entity extraction failed, using keyword skills", error=str(e))
        return keywords[:limit]

    combined = dedupe_skills(keywords + entities)
    logger.debug(
        "Combined skill extraction",
        keyword_skills=len(keywords),
        entity_skills=len(entities),
        combined=len(combined),
    )
    return combined[:limit]


def extract_job_skills(description: Optional[str], api_key: Optional[str] = None) -> List[str]:
    """Skills for a job description; raises ValidationError when it is too short."""
    if not description or len(description.strip()) < MIN_DESCRIPTION_LENGTH:
        raise ValidationError([
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters long"
        ])
    limit = JOB_COMBINED_LIMIT if api_key else JOB_SKILL_LIMIT
    return extract_skills(description, limit=limit, api_key=api_key)


def extract_resume_skills(text: Optional[str], api_key: Optional[str] = None) -> List[str]:
    """Skills for already-extracted resume text."""
    return extract_skills(text, limit=RESUME_SKILL_LIMIT, api_key=api_key)
