"""A stand-in for the /predict service, speaking the same wire contract.

Labels come from a keyword rule instead of a trained model; everything else
(multipart vs. JSON dispatch, annotated CSV body, pie chart in X-Graph-Data)
follows what the real service sends.
"""

import base64
import re
from io import BytesIO

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
from flask import Flask, jsonify, request, send_file  # noqa: E402

POSITIVE_WORDS = {"great", "good", "love", "excellent", "amazing"}


def keyword_sentiment(text):
    words = re.sub("[^a-zA-Z]", " ", text).lower().split()
    return "Positive" if POSITIVE_WORDS.intersection(words) else "Negative"


def get_distribution_graph(data):
    fig = plt.figure(figsize=(3, 3))
    data["Predicted sentiment"].value_counts().plot(kind="pie", autopct="%1.1f%%", ylabel="")
    graph = BytesIO()
    plt.savefig(graph, format="png")
    plt.close(fig)
    return graph


def create_app(with_graph=True):
    app = Flask(__name__)
    app.config["WITH_GRAPH"] = with_graph

    @app.route("/predict", methods=["POST"])
    def predict():
        if "file" in request.files:
            data = pd.read_csv(request.files["file"])
            if "Sentence" not in data.columns:
                return jsonify({"error": "CSV needs a Sentence column"}), 400

            data["Predicted sentiment"] = [keyword_sentiment(s) for s in data["Sentence"]]
            predictions = BytesIO()
            data.to_csv(predictions, index=False)
            predictions.seek(0)

            response = send_file(
                predictions,
                mimetype="text/csv",
                as_attachment=True,
                download_name="Predictions.csv",
            )
            if app.config["WITH_GRAPH"]:
                graph = get_distribution_graph(data)
                response.headers["X-Graph-Exists"] = "true"
                response.headers["X-Graph-Data"] = base64.b64encode(graph.getbuffer()).decode("ascii")
            return response

        payload = request.get_json(silent=True) or {}
        if "text" not in payload:
            return jsonify({"error": "No text or file supplied"}), 400
        return jsonify({"sentiment": keyword_sentiment(payload["text"]).lower()})

    return app
