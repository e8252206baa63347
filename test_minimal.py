"""
OpenAPI schema generation for the application
"""
from funding_checker.config import settings
from funding_checker.main import app


def test_openapi_schema_generates():
    schema = app.openapi()
    paths = schema.get("paths", {})

    assert schema["info"]["title"] == settings.app_name
    assert f"{settings.api_prefix}/eligibility/assess" in paths
    assert f"{settings.api_prefix}/courses/{{learning_aim_ref}}" in paths
    assert f"{settings.api_prefix}/postcodes/{{postcode}}" in paths


def test_assessment_schema_uses_camel_case():
    components = app.openapi()["components"]["schemas"]
    assert "learnerProfile" in components["AssessmentResult"]["properties"]
