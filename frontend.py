import logging

from flask import Flask, jsonify, request
from markupsafe import escape

from backend import (
    analyze_sequence,
    check_convergence,
    expression_to_latex,
)
from errors import ExpressionError
from expression_parser import parse_expression

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "MAX_EXPRESSION_LENGTH": 500,
}

# Basic HTML template for input and output
HTML_PAGE = """
<!doctype html>
<html>
  <head>
    <title>Sequence Convergence Tester</title>
    <link rel="stylesheet" href="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/katex.min.css">
    <script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/katex.min.js"></script>
    <script defer src="https://cdn.jsdelivr.net/npm/katex@0.16.9/dist/contrib/auto-render.min.js"
            onload="renderMathInElement(document.body);"></script>
  </head>
  <body>
    <h1>Sequence Convergence Tester</h1>
    <p>Enter the general term a<sub>n</sub> of a sequence to find lim<sub>n&rarr;&infin;</sub> a<sub>n</sub>:</p>
    <form method="get">
      <input type="text" name="expr" size="40" value="%s" placeholder="e.g. (2n+1)/(3n+2)"/>
      <button type="submit">Check Convergence</button>
    </form>
    %s
  </body>
</html>
"""


def _too_long(expr, app):
    return len(expr) > app.config["MAX_EXPRESSION_LENGTH"]


def create_app(config=None):
    app = Flask(__name__)
    app.config.update(DEFAULT_CONFIG)
    app.config.from_prefixed_env()
    if config:
        app.config.update(config)

    @app.route("/", methods=["GET"])
    def index():
        expr = request.args.get("expr", "")  # get 'expr' parameter from URL query string
        if expr == "":
            # No expression entered yet: show the form only
            return HTML_PAGE % ("", "")
        expr_display = escape(expr)
        if _too_long(expr, app):
            logger.warning("rejected expression of length %d", len(expr))
            output = f"<p><b>Result:</b> Invalid expression: longer than {app.config['MAX_EXPRESSION_LENGTH']} characters</p>"
            return HTML_PAGE % (expr_display, output)

        result = analyze_sequence(expr)
        try:
            typeset = f"\\[ a_n = {escape(expression_to_latex(parse_expression(expr)))} \\]"
        except ExpressionError:
            typeset = f"<code>{expr_display}</code>"
        output = (
            f"<h3>Sequence: {typeset}</h3>"
            f"<p><b>Result:</b> {escape(result)}</p>"
        )
        return HTML_PAGE % (expr_display, output)

    @app.route("/api/converge", methods=["GET"])
    def api_converge():
        expr = request.args.get("expr", "")
        if _too_long(expr, app):
            logger.warning("rejected expression of length %d", len(expr))
            return jsonify(error=f"Expression longer than {app.config['MAX_EXPRESSION_LENGTH']} characters"), 400
        try:
            result = check_convergence(expr)
            latex = expression_to_latex(parse_expression(expr))
        except ExpressionError as e:
            logger.warning("could not evaluate %r: %s", expr, e)
            return jsonify(error=str(e)), 400
        return jsonify(expression=expr, latex=latex, result=result.to_dict())

    return app


app = create_app()

if __name__ == "__main__":
    app.run(debug=False)
