from flask import g, request, jsonify
from careers.application.careers.jobs import create_job, delete_job, list_jobs
from careers.normalizers.job import normalize_job
from careers.utils.decorators import company_required
from . import v1_bp


@v1_bp.route("/companies/<slug>/jobs", methods=["GET"])
@company_required
def get_jobs(slug):
    company = g.current_company
    jobs = list_jobs(company_id=company.id)
    return jsonify({"items": [normalize_job(job) for job in jobs]})


@v1_bp.route("/companies/<slug>/jobs", methods=["POST"])
@company_required
def post_job(slug):
    company = g.current_company
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({"error": "Invalid request body"}), 400

    job = create_job(company_id=company.id, data=data)
    return jsonify(normalize_job(job)), 201


@v1_bp.route("/companies/<slug>/jobs/<job_id>", methods=["DELETE"])
@company_required
def remove_job(slug, job_id):
    company = g.current_company

    if request.args.get("confirm", "").lower() != "true":
        return jsonify({"error": "Confirmation required"}), 400

    delete_job(company_id=company.id, job_id=job_id, confirmed=True)
    return jsonify({"message": "Job deleted successfully"}), 200
