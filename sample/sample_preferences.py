"""Preferences declared by the sample application."""

from typing import Annotated

from sharedpreform import DefaultValue, PrefKey, PrefStore


@PrefStore("SamplePreferences")
class SamplePreferences:
    """User profile settings."""

    username: Annotated[str, PrefKey("username", async_=True), DefaultValue("Guest")]
    is_logged_in: Annotated[bool, PrefKey("isLoggedIn", async_=True), DefaultValue("false")]
    age: Annotated[int, PrefKey("age", async_=True), DefaultValue("0")]
    height: Annotated[float, PrefKey("height", async_=True), DefaultValue("0.0f")]
    user_set: Annotated[set[str], PrefKey("userSet", async_=True)]
