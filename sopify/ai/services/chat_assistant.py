import logging

logger = logging.getLogger(__name__)

CHAT_PROMPT = (
    "You are an expert assistant helping with Standard Operating Procedures and incident management.\n\n"
    "Question: {message}\n\n"
    "Provide a clear, helpful response about SOPs, incident response, or operational procedures. "
    "Keep it practical and actionable."
)

KEY_COMPONENTS_ANSWER = """Key components of an effective SOP include:

• **Clear Purpose** - Define why the procedure exists and its scope
• **Step-by-Step Instructions** - Detailed, sequential actions anyone can follow
• **Roles & Responsibilities** - Who does what and when
• **Decision Points** - What to do if something goes wrong
• **Tools & Resources** - Required equipment, software, or documentation
• **Quality Checks** - How to verify the procedure was completed correctly
• **Review Process** - Regular updates and improvement cycles

SOPify helps create these structured procedures automatically from incident reports."""

INCIDENT_ANSWER = """For incident management, follow these key principles:

• **Immediate Response** - Assess severity and contain the issue
• **Communication** - Notify stakeholders and document actions taken
• **Investigation** - Identify root cause and contributing factors
• **Resolution** - Implement fix and verify system restoration
• **Prevention** - Update procedures to prevent recurrence
• **Documentation** - Create or update SOPs based on lessons learned

SOPify automates this process by converting incidents into structured SOPs."""

COMPLIANCE_ANSWER = """Compliance requirements for SOPs typically include:

• **Documentation Standards** - Proper version control and approval processes
• **Training Records** - Evidence that staff are trained on procedures
• **Regular Reviews** - Scheduled updates and effectiveness assessments
• **Audit Trails** - Clear records of when and why changes were made
• **Access Controls** - Ensuring procedures are available to authorized personnel
• **Performance Metrics** - Measuring adherence and effectiveness

SOPify helps maintain compliance through automated documentation and tracking."""

DEFAULT_ANSWER = """I can help with Standard Operating Procedures and incident management.

Common topics I assist with:
• **SOP Development** - Creating effective, step-by-step procedures
• **Incident Response** - Managing and learning from operational issues
• **Process Improvement** - Optimizing workflows and reducing errors
• **Compliance** - Meeting regulatory and audit requirements
• **Team Training** - Ensuring consistent procedure execution

What specific aspect would you like to explore?"""


def build_chat_prompt(message: str) -> str:
    return CHAT_PROMPT.format(message=message)


def fallback_answer(message: str) -> str:
    """Canned answer picked by keyword, used when the model replies with nothing."""
    lower = (message or "").lower()

    if "key component" in lower or "effective sop" in lower:
        return KEY_COMPONENTS_ANSWER
    if "incident" in lower or "emergency" in lower:
        return INCIDENT_ANSWER
    if "compliance" in lower or "regulation" in lower:
        return COMPLIANCE_ANSWER
    return DEFAULT_ANSWER


def answer(message: str, service, temperature: float = 0.7, max_output_tokens: int = 1024) -> str:
    text = service.generate(
        build_chat_prompt(message),
        temperature=temperature,
        max_output_tokens=max_output_tokens,
        top_k=40,
        top_p=0.8,
    )
    if not text or not text.strip():
        logger.info("[chat] empty model reply, answering from fallback topics")
        return fallback_answer(message)
    return text
