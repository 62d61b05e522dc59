"""
Topic table for demo section synthesis.

Each section title is classified into one topic tag by keyword substring match
against the lower-cased title. Topics are checked in SECTION_TOPICS order and
the first hit wins; titles with no hit fall back to GENERAL_TOPIC.

Bodies are Jinja2 sources rendered with `section`, `project_summary`, and
`core_requirements` in scope. Every body is non-empty and keeps code fences balanced.
"""

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class SectionTopic:
    """
    One entry in the topic table.

    Attributes:
        tag: Topic identifier
        keywords: Lower-case substrings that select this topic
        body: Jinja2 source for the section body
    """

    tag: str
    keywords: Tuple[str, ...]
    body: str


# =============================================================================
# TOPIC BODIES
# =============================================================================

_OVERVIEW_BODY = """\
### Project Purpose

{{ project_summary }}

### Key Objectives

{{ core_requirements }}"""

_CURRENT_STATE_BODY = """\
### Current Problems

- Limited scalability of the existing system
- Inefficiency caused by manual processes
- Difficulty managing and analyzing data

### Required Improvements

- Automated workflows
- Transition to cloud-based infrastructure
- Real-time data processing and analytics"""

_REQUIREMENTS_BODY = """\
### Functional Requirements

{{ core_requirements }}

### Non-Functional Requirements

- **Performance:** Response time under 2 seconds
- **Security:** Access control based on AWS IAM
- **Scalability:** Auto Scaling support
- **Availability:** 99.9% or higher"""

_ASSUMPTIONS_RISKS_BODY = """\
### Assumptions

- The organization has approved the use of AWS services.
- The development team has working knowledge of AWS services.
- The project budget covers the expected AWS costs.

### Risks

- **Technical risk:** Learning curve for unfamiliar AWS services
- **Schedule risk:** Migration takes longer than planned
- **Cost risk:** AWS spend exceeds the initial estimate

### Mitigations

- Enroll the team in AWS training
- Plan the migration in incremental phases
- Monitor spend with AWS Cost Explorer"""

_ARCHITECTURE_BODY = """\
### System Structure

```
[Users] -> [CloudFront] -> [ALB] -> [ECS/Fargate]
                                         |
                                   [RDS/Aurora]
                                         |
                                    [S3 Bucket]
```

### Major Components

- **Frontend:** Single-page application served through CloudFront
- **Backend:** API service running on ECS Fargate
- **Database:** Amazon Aurora (MySQL compatible)
- **Storage:** S3 for static assets and backups

### Data Flow

1. User requests arrive through CloudFront.
2. The ALB routes requests to ECS containers.
3. The backend service queries the Aurora database.
4. Results are returned as JSON."""

_TECH_STACK_BODY = """\
### AWS Services

- **Compute:** Amazon ECS (Fargate)
- **Database:** Amazon Aurora MySQL
- **Storage:** Amazon S3
- **Networking:** Amazon VPC, CloudFront, ALB
- **Security:** AWS IAM, AWS Secrets Manager
- **Monitoring:** CloudWatch, X-Ray

### Development Stack

- **Frontend:** React, Tailwind CSS
- **Backend:** Python, FastAPI
- **Database:** MySQL 8.0
- **Infrastructure as code:** AWS CDK"""

_SECURITY_BODY = """\
### Authentication and Authorization

- User authentication through Amazon Cognito
- IAM role based service-to-service authentication
- JWT based API authentication

### Data Protection

- Encryption in transit: TLS 1.3
- Encryption at rest: enabled for S3 and RDS
- Secrets: stored in AWS Secrets Manager

### Network Security

- Workloads placed in private VPC subnets
- Traffic restricted by security groups
- Web attacks filtered by AWS WAF"""

_SCALABILITY_BODY = """\
### Auto Scaling

- ECS Service Auto Scaling enabled
- Scale out when CPU utilization exceeds 70%
- Minimum 2 tasks, maximum 10 tasks

### Load Balancing

- Application Load Balancer in front of the service
- Health checks detect and replace failed tasks

### Caching Strategy

- Static content cached by CloudFront
- Hot data cached in ElastiCache (Redis)
- TTLs manage cache invalidation"""

_COST_BODY = """\
### Estimated Monthly Cost

| Service | Estimated Cost |
|---------|----------------|
| ECS Fargate | $150 |
| Aurora MySQL | $200 |
| S3 | $50 |
| CloudFront | $100 |
| Other services | $50 |
| **Total** | **$550** |

### Cost Optimization

- Use Reserved Instances or Savings Plans
- Archive old data with S3 lifecycle policies
- Set up cost monitoring and alerts in CloudWatch"""

_IMPLEMENTATION_BODY = """\
### Implementation Phases

1. **Phase 1: Infrastructure** (2 weeks)
   - VPC and network setup
   - Aurora configuration
   - S3 bucket creation

2. **Phase 2: Application Deployment** (3 weeks)
   - ECS cluster configuration
   - Backend service deployment
   - Frontend deployment

3. **Phase 3: Testing and Optimization** (2 weeks)
   - Performance testing
   - Security review
   - Monitoring setup"""

_MIGRATION_BODY = """\
### Migration Strategy

- **Approach:** Blue-green deployment
- **Data migration:** AWS Database Migration Service
- **Rollback plan:** Keep the existing system running for 2 weeks

### Migration Steps

1. Build and test the development environment
2. Validate in a staging environment
3. Deploy to production
4. Shift traffic gradually"""

_GENERAL_BODY = """\
{{ section.description }}

This section should be written against the specific requirements of the project.

**Key considerations:**
- {{ project_summary }}
- {{ core_requirements }}"""


# =============================================================================
# TOPIC TABLE
# =============================================================================

# Priority order matters: "Technical Architecture" is architecture, not tech stack
SECTION_TOPICS: Tuple[SectionTopic, ...] = (
    SectionTopic("overview", ("overview",), _OVERVIEW_BODY),
    SectionTopic("current_state", ("current state", "analysis"), _CURRENT_STATE_BODY),
    SectionTopic("requirements", ("requirement",), _REQUIREMENTS_BODY),
    SectionTopic("assumptions_risks", ("assumption", "risk"), _ASSUMPTIONS_RISKS_BODY),
    SectionTopic("architecture", ("architecture",), _ARCHITECTURE_BODY),
    SectionTopic("tech_stack", ("tech stack", "tech"), _TECH_STACK_BODY),
    SectionTopic("security", ("security",), _SECURITY_BODY),
    SectionTopic("scalability", ("scalability", "performance"), _SCALABILITY_BODY),
    SectionTopic("cost", ("cost",), _COST_BODY),
    SectionTopic("implementation", ("implementation",), _IMPLEMENTATION_BODY),
    SectionTopic("migration", ("migration",), _MIGRATION_BODY),
)

GENERAL_TOPIC = SectionTopic("general", (), _GENERAL_BODY)

TOPICS_BY_TAG: Dict[str, SectionTopic] = {
    topic.tag: topic for topic in (*SECTION_TOPICS, GENERAL_TOPIC)
}


def classify_section(title: str) -> str:
    """
    Classify a section title into a topic tag.

    Args:
        title: Section title (any case)

    Returns:
        Tag of the first topic with a keyword contained in the title, else "general"

    Examples:
        >>> classify_section("Assumptions/Risks")
        'assumptions_risks'
        >>> classify_section("Technical Architecture")
        'architecture'
        >>> classify_section("Expected Benefits")
        'general'
    """
    lowered = title.lower()
    for topic in SECTION_TOPICS:
        if any(keyword in lowered for keyword in topic.keywords):
            return topic.tag
    return GENERAL_TOPIC.tag
