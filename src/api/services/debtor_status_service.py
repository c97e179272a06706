# This file implements the debtor status lookups behind `/debtor_status_info`.
# It exists so route handlers deal only with HTTP while SQL composition stays centralized.
# Batch mode returns raw per-record amounts for many promise numbers in one round trip.
# Single mode aggregates per borrower and record, reducing remainder columns with MAX to avoid fan-out double counting.

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from src.api.db_access import DatabaseClient
from src.api.error_handlers import INTERNAL_ERROR_MESSAGE, APIError
from src.api.query_builder import PredicateBuilder, WhereClause, clean_param, split_csv_param

logger = logging.getLogger(__name__)

ACTIVE_PROJECT_STATUSES: tuple[str, ...] = ("เปิดโครงการ", "ระหว่างดำเนินคดี", "ปิดโครงการ")
PROJECT_STATUS_PREDICATE = "ds.ds_status_project IN ({})".format(
    ", ".join(f"'{status}'" for status in ACTIVE_PROJECT_STATUSES)
)

IDCARD_PREDICATE = "TRIM(w.wfri_id_card) = {param}"
PROMISE_PREDICATE = "TRIM(ds.ds_number_promise) = {param}"
PROVINCE_PREDICATE = "TRIM(p.dpd_province) ILIKE {param}"

# Payment rows count as "not yet due" until five days past their due date.
DEBT_NOT_DUE_SUBQUERY = """
SELECT
    tpm_ref,
    SUM(
        CASE
            WHEN (tpm_end_paid + INTERVAL '5 day') >= CURRENT_DATE
                AND COALESCE(tpm_re_money, 0) = 0
            THEN tpm_paid_principle
            WHEN (tpm_end_paid + INTERVAL '5 day') >= CURRENT_DATE
                AND tpm_paid_principle > COALESCE(tpm_re_money, 0)
            THEN tpm_paid_principle - tpm_re_money
            ELSE 0
        END
    ) AS debt_not_due
FROM table_paid_money
WHERE tmp_paystatus IS DISTINCT FROM 'Canceled'
GROUP BY tpm_ref
"""

BATCH_QUERY = f"""
SELECT
    ds.ds_number_promise,
    ds.remaining_principal AS "เงินต้นคงเหลือ",
    COALESCE(vp.debt_not_due, 0) AS "หนี้ยังไม่ถึงกำหนด"
FROM debtor_status_info ds
LEFT JOIN ({DEBT_NOT_DUE_SUBQUERY}) vp ON vp.tpm_ref = ds.id
WHERE ds.ds_number_promise = ANY(CAST(:promises AS TEXT[]))
ORDER BY ds.ds_number_promise
"""

SINGLE_QUERY_TEMPLATE = f"""
WITH valid_payment AS ({DEBT_NOT_DUE_SUBQUERY})
SELECT
    w.wfri_id_card,
    w.wfri_full_name,
    p.dpd_province,
    ddd.ddd_district,
    sdd.dsdd_sub_district,
    ds.ds_name_year,
    ds.ds_number_promise,
    CASE WHEN r.mrpr_tb_position = 'position_1'
        THEN 'ผู้แทนกลุ่ม เสนอโครงการ'
        ELSE 'ผู้ร่วมโครงการ'
    END AS "สถานะผู้กู้",
    ds.ds_project,
    ds.ds_status_project,
    ds.ds_rev_money,
    MAX(COALESCE(ds.remaining_principal, 0)) AS "เงินต้นคงเหลือ",
    COALESCE(pm.debt_not_due, 0) AS "หนี้ยังไม่ถึงกำหนด",
    MAX(COALESCE(ds.remaining_interest, 0)) AS "ดอกเบี้ยคงเหลือ",
    MAX(COALESCE(ds.remaining_fine, 0)) AS "เบี้ยปรับคงเหลือ",
    MAX(COALESCE(ds.remaining_interest_old_new, 0)) AS "ดอกเบี้ยผิดนัดคงเหลือ",
    MAX(COALESCE(ds.remaining_sum, 0)) AS "รวมคงเหลือ"
FROM debtor_status_info ds
LEFT JOIN money_revolving_project_record_info m ON m.id = ds.ds_number_request
LEFT JOIN money_revolving_project_record_table r ON r.mrpr_tb_m2o_ref = m.id
LEFT JOIN women_fund_register_info w ON w.id = r.mrpr_tb_id_card
LEFT JOIN define_sub_district_data sdd ON sdd.id = CAST(ds.ds_tambon AS INTEGER)
LEFT JOIN define_district_data ddd ON ddd.id = sdd.dsdd_district_ref
LEFT JOIN define_province_data p ON p.id = ds.ds_code_province
LEFT JOIN valid_payment pm ON pm.tpm_ref = ds.id
WHERE {{where_sql}}
GROUP BY
    w.wfri_id_card, w.wfri_full_name,
    p.dpd_province,
    ddd.ddd_district, sdd.dsdd_sub_district,
    ds.ds_name_year, ds.ds_number_promise,
    ds.ds_project, ds.ds_status_project,
    ds.ds_rev_money,
    r.mrpr_tb_position,
    pm.debt_not_due,
    ds.id
ORDER BY ds.ds_number_promise, r.mrpr_tb_position
"""


def build_single_filter(
    *,
    idcard: str | None,
    promise: str | None,
    province: str | None,
) -> WhereClause:
    """Compose the single-mode WHERE clause; absent or blank filters are skipped."""

    builder = PredicateBuilder()
    builder.add_fixed(PROJECT_STATUS_PREDICATE)
    builder.add_if_present(IDCARD_PREDICATE, idcard)
    builder.add_if_present(PROMISE_PREDICATE, promise)
    builder.add_if_present(PROVINCE_PREDICATE, province, pattern="%{}%")
    return builder.build()


def build_single_query(where: WhereClause) -> str:
    return SINGLE_QUERY_TEMPLATE.format(where_sql=where.sql)


class DebtorStatusService:
    """Data retrieval for debtor status routes."""

    def __init__(self, *, db: DatabaseClient) -> None:
        self.db = db

    def lookup(
        self,
        *,
        promises: str | None = None,
        idcard: str | None = None,
        promise: str | None = None,
        province: str | None = None,
    ) -> list[dict[str, Any]]:
        """Dispatch to batch mode when `promises` carries at least one value."""

        if clean_param(promises) is not None:
            return self.lookup_batch(split_csv_param(promises))
        return self.lookup_single(idcard=idcard, promise=promise, province=province)

    def lookup_batch(self, promise_numbers: list[str]) -> list[dict[str, Any]]:
        if not promise_numbers:
            return []
        logger.info("Batch lookup for %d promise numbers", len(promise_numbers))
        return self._fetch(BATCH_QUERY, {"promises": list(promise_numbers)})

    def lookup_single(
        self,
        *,
        idcard: str | None = None,
        promise: str | None = None,
        province: str | None = None,
    ) -> list[dict[str, Any]]:
        where = build_single_filter(idcard=idcard, promise=promise, province=province)
        logger.debug("Single lookup with %d bound filters", len(where.params))
        return self._fetch(build_single_query(where), where.params)

    def _fetch(self, query: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        try:
            return self.db.fetch_all(query, params)
        except SQLAlchemyError as exc:
            logger.exception("Debtor status query failed")
            raise APIError(status_code=500, message=INTERNAL_ERROR_MESSAGE) from exc
