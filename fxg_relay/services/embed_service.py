"""Embed builders for every message the relay sends."""

from __future__ import annotations

import discord

FOOTER_TEXT = "FxG Team"

COLOR_INVITE = 0x8B5CF6
COLOR_APPROVED = 0x10B981
COLOR_DENIED = 0xEF4444
COLOR_INFO = 0x3B82F6


def _embed(title: str, description: str, color: int) -> discord.Embed:
    embed = discord.Embed(
        title=title,
        description=description,
        color=color,
        timestamp=discord.utils.utcnow(),
    )
    embed.set_footer(text=FOOTER_TEXT)
    return embed


def interview_invitation(applicant_name: str, application_type: str) -> discord.Embed:
    return _embed(
        "🎉 Interview Invitation",
        f"Hi **{applicant_name}**!\n\n"
        f"Congratulations! You've been selected for an interview for the **{application_type}** position.\n\n"
        "Click **Join Interview** below and we'll open a private channel where our team will meet you.\n\n"
        "Good luck! 🍀",
        COLOR_INVITE,
    )


def application_approved(applicant_name: str, application_type: str) -> discord.Embed:
    return _embed(
        "✅ Application Approved!",
        f"Hi **{applicant_name}**!\n\n"
        f"Congratulations! Your application for the **{application_type}** position has been **APPROVED**! 🎉\n\n"
        "Welcome to the FxG team! We're excited to have you on board.\n\n"
        "You'll receive further instructions soon.",
        COLOR_APPROVED,
    )


def application_denied(applicant_name: str, application_type: str) -> discord.Embed:
    return _embed(
        "Application Update",
        f"Hi **{applicant_name}**,\n\n"
        f"Thank you for your interest in the **{application_type}** position.\n\n"
        "Unfortunately, we've decided to move forward with other candidates at this time.\n\n"
        "We appreciate your time and encourage you to apply again in the future!",
        COLOR_DENIED,
    )


def career_approved(applicant_name: str, application_type: str) -> discord.Embed:
    return _embed(
        "✅ Career Application Approved!",
        f"Hi **{applicant_name}**!\n\n"
        f"Great news! You've been accepted into the **{application_type}** career track. 🎉\n\n"
        "Your new roles are already active on the server.\n\n"
        "A team lead will reach out with your onboarding plan.",
        COLOR_APPROVED,
    )


def career_denied(applicant_name: str, application_type: str) -> discord.Embed:
    return _embed(
        "Career Application Update",
        f"Hi **{applicant_name}**,\n\n"
        f"Thank you for applying to the **{application_type}** career track.\n\n"
        "After careful review we won't be moving forward with your application right now.\n\n"
        "Keep growing with the community, and feel free to apply again later!",
        COLOR_DENIED,
    )


def interview_channel_ready(channel_id: int) -> discord.Embed:
    return _embed(
        "📋 Interview Channel Created",
        f"Your private interview channel is ready: <#{channel_id}>\n\n"
        "Head over there and a member of our team will be with you shortly.",
        COLOR_INFO,
    )


def helper_welcome(user_id) -> discord.Embed:
    return _embed(
        "👋 Welcome, new Helper!",
        f"Please welcome <@{user_id}> to the FxG helper team!",
        COLOR_APPROVED,
    )
