"""Default Business Requirements Document served before any version is saved."""

from datetime import date
from typing import Optional

DEFAULT_BRD_TEMPLATE = """# Business Requirements Document

## 1. Project Overview
**Project Name:** [Project Name]
**Date:** {date}
**Stakeholders:** [List key stakeholders]
**Document Version:** 1.0

## 2. Executive Summary
Provide a high-level overview of the project, its objectives, and expected outcomes.

## 3. Business Objectives
### Primary Objectives:
- Objective 1: [Describe primary business goal]
- Objective 2: [Describe secondary business goal]
- Objective 3: [Describe tertiary business goal]

### Success Metrics:
- KPI 1: [Define measurable success criteria]
- KPI 2: [Define measurable success criteria]
- KPI 3: [Define measurable success criteria]

## 4. Scope and Boundaries

### In Scope:
- Feature/Function 1
- Feature/Function 2
- Feature/Function 3

### Out of Scope:
- Items explicitly excluded from this project
- Future enhancements to be considered separately

## 5. Functional Requirements

### 5.1 Core Features
**FR-001:** [Feature Name]
- Description: [Detailed description]
- Priority: High/Medium/Low
- Acceptance Criteria: [Clear criteria for completion]

**FR-002:** [Feature Name]
- Description: [Detailed description]
- Priority: High/Medium/Low
- Acceptance Criteria: [Clear criteria for completion]

### 5.2 User Stories
- As a [user type], I want [goal] so that [benefit]
- As a [user type], I want [goal] so that [benefit]
- As a [user type], I want [goal] so that [benefit]

## 6. Non-Functional Requirements

### 6.1 Performance Requirements
- Response time: [Specify requirements]
- Throughput: [Specify requirements]
- Scalability: [Specify requirements]

### 6.2 Security Requirements
- Authentication: [Specify requirements]
- Authorization: [Specify requirements]
- Data Protection: [Specify requirements]

### 6.3 Usability Requirements
- User Interface: [Specify requirements]
- Accessibility: [Specify requirements]
- User Experience: [Specify requirements]

## 7. Business Rules and Constraints

### Business Rules:
1. Rule 1: [Describe business rule]
2. Rule 2: [Describe business rule]
3. Rule 3: [Describe business rule]

### Constraints:
- Budget: [Specify budget constraints]
- Timeline: [Specify timeline constraints]
- Resources: [Specify resource constraints]
- Technology: [Specify technology constraints]

## 8. Assumptions and Dependencies

### Assumptions:
- Assumption 1: [Describe assumption]
- Assumption 2: [Describe assumption]

### Dependencies:
- Dependency 1: [External dependency]
- Dependency 2: [Internal dependency]

## 9. Risk Assessment

| Risk | Impact | Probability | Mitigation Strategy |
|------|--------|-------------|-------------------|
| Risk 1 | High/Medium/Low | High/Medium/Low | [Strategy] |
| Risk 2 | High/Medium/Low | High/Medium/Low | [Strategy] |
| Risk 3 | High/Medium/Low | High/Medium/Low | [Strategy] |

## 10. Implementation Timeline

### Phase 1: Planning & Design
- Duration: [Timeframe]
- Key Activities: [List activities]
- Deliverables: [List deliverables]

### Phase 2: Development
- Duration: [Timeframe]
- Key Activities: [List activities]
- Deliverables: [List deliverables]

### Phase 3: Testing & Deployment
- Duration: [Timeframe]
- Key Activities: [List activities]
- Deliverables: [List deliverables]

## 11. Acceptance Criteria
- [ ] All functional requirements implemented
- [ ] All non-functional requirements met
- [ ] User acceptance testing completed
- [ ] Documentation completed
- [ ] Training completed

## 12. Sign-off
**Business Analyst:** _____________________ Date: _______
**Project Manager:** _____________________ Date: _______
**Stakeholder:** _____________________ Date: _______
"""


def build_default_template(today: Optional[date] = None) -> str:
    """Return the default document dated ``today`` (MM/DD/YYYY)."""
    today = today or date.today()
    return DEFAULT_BRD_TEMPLATE.format(date=today.strftime("%m/%d/%Y"))
