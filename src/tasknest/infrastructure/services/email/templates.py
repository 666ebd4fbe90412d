"""Built-in email templates.

Each template has a subject, an HTML body and a plain-text body, all
rendered with Jinja2.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    html_body: str
    text_body: str


VERIFICATION_CODE = EmailTemplate(
    subject="Verify your email for {{ app_name }}",
    html_body="""
<h2>Welcome to {{ app_name }}, {{ name }}!</h2>
<p>Use the code below to verify your email address:</p>
<p style="font-size: 28px; letter-spacing: 6px; font-weight: bold;">{{ code }}</p>
<p>This code expires in {{ expiry_minutes }} minutes.</p>
<p>If you did not create an account, you can ignore this email.</p>
""",
    text_body="""
Welcome to {{ app_name }}, {{ name }}!

Your verification code is: {{ code }}

This code expires in {{ expiry_minutes }} minutes.
If you did not create an account, you can ignore this email.
""",
)

PASSWORD_RESET_CODE = EmailTemplate(
    subject="Reset your {{ app_name }} password",
    html_body="""
<h2>Hi {{ name }},</h2>
<p>Use the code below to reset your password:</p>
<p style="font-size: 28px; letter-spacing: 6px; font-weight: bold;">{{ code }}</p>
<p>This code expires in {{ expiry_minutes }} minutes.</p>
<p>If you did not request a password reset, you can ignore this email.</p>
""",
    text_body="""
Hi {{ name }},

Your password reset code is: {{ code }}

This code expires in {{ expiry_minutes }} minutes.
If you did not request a password reset, you can ignore this email.
""",
)

INVITATION = EmailTemplate(
    subject="{{ inviter_name }} invited you to {{ workspace_name }} on {{ app_name }}",
    html_body="""
<h2>You've been invited!</h2>
<p><strong>{{ inviter_name }}</strong> has invited you to join
<strong>{{ workspace_name }}</strong> on {{ app_name }}.</p>
{% if personal_message %}
<blockquote>{{ personal_message }}</blockquote>
{% endif %}
<p><a href="{{ invitation_url }}">Accept invitation</a></p>
<p>This invitation expires in {{ expiry_hours }} hours.</p>
""",
    text_body="""
{{ inviter_name }} has invited you to join {{ workspace_name }} on {{ app_name }}.
{% if personal_message %}

"{{ personal_message }}"
{% endif %}

Accept the invitation here: {{ invitation_url }}

This invitation expires in {{ expiry_hours }} hours.
""",
)

WELCOME = EmailTemplate(
    subject="Welcome to {{ app_name }}!",
    html_body="""
<h2>Welcome aboard, {{ name }}!</h2>
<p>Your email is verified and your workspace is ready.</p>
<p><a href="{{ dashboard_url }}">Open {{ app_name }}</a></p>
""",
    text_body="""
Welcome aboard, {{ name }}!

Your email is verified and your workspace is ready: {{ dashboard_url }}
""",
)
