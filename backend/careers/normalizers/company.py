def normalize_company(company, logo_url=None):
    return {
        "id": company.id,
        "name": company.name,
        "slug": company.slug,
        "logo_url": logo_url,
    }
