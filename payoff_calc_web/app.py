import os
from datetime import date

from flask import Flask, jsonify, render_template, request

from payoff_calc.config import EngineSettings
from payoff_calc.exceptions import PayoffCalcError, UnrecognizedModeError
from payoff_calc.modes import MODE_HELP, MODES, ModeRequest, run_mode
from payoff_calc.result import Result
from payoff_calc.utils import parse_amount, parse_month, parse_month_count

app = Flask(__name__)
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
settings = EngineSettings.from_env()


def _optional(form, name: str, parser):
    value = str(form.get(name, "") or "").strip()
    return parser(value) if value else None


def _form_to_request(form) -> ModeRequest:
    principal = parse_amount(str(form.get("principal", "")).strip())
    interest = _optional(form, "interest", parse_amount) or parse_amount("0")
    month = _optional(form, "month", parse_month) or date.today().month
    stop_flag = str(form.get("stop_on_payoff", "1")).strip().lower()
    return ModeRequest(
        principal=principal,
        interest=interest,
        month=month,
        payment=_optional(form, "payment", parse_amount),
        months=_optional(form, "months", parse_month_count),
        stop_on_payoff=stop_flag not in ("0", "false", "no", "off"),
    )


def _run_form(mode: str, form) -> Result[str]:
    try:
        if mode not in MODES:
            raise UnrecognizedModeError(mode)
        mode_request = _form_to_request(form)
    except PayoffCalcError as exc:
        return Result.fail(str(exc), exc.error_type)
    return run_mode(mode, mode_request, settings)


@app.route("/", methods=["GET", "POST"])
def index():
    output = None
    error = None
    form = {}
    mode = "nextbal"

    if request.method == "POST":
        form = request.form
        mode = form.get("mode", "nextbal")
        if mode == "help":
            output = MODE_HELP
        else:
            result = _run_form(mode, form)
            if result:
                output = result.value
            else:
                error = result.error

    return render_template(
        "index.html",
        modes=MODES,
        mode=mode,
        form=form,
        output=output,
        error=error,
        current_month=date.today().month,
    )


@app.post("/api/<mode>")
def run_api(mode: str):
    if mode == "help":
        return jsonify({"ok": True, "output": MODE_HELP})
    payload = request.get_json(silent=True)
    form = payload if isinstance(payload, dict) else request.form
    result = _run_form(mode, form)
    if not result:
        return jsonify({"ok": False, "error": result.error, "error_type": result.error_type}), 400
    return jsonify({"ok": True, "output": result.value})


if __name__ == "__main__":
    print("Starting payoff calculator web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
