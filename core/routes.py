"""Browser paths of the portal views."""

HOME = "/"
LOGIN = "/login"
SIGNUP = "/signup"
DASHBOARD = "/dashboard"
UPLOAD_EVIDENCE = "/upload-evidence"
PREDICT_ATTACK = "/predict-attack"

ALL = [HOME, LOGIN, SIGNUP, DASHBOARD, UPLOAD_EVIDENCE, PREDICT_ATTACK]

# Views that need a signed-in session.
PROTECTED = {DASHBOARD, UPLOAD_EVIDENCE, PREDICT_ATTACK}
