"""
Streamlit UI for Brand Price Comparison

- 카테고리별 최저가: cheapest brand(s) per category and the total
- 단일 브랜드 최저가: cheapest brand for buying every category from one seller
- 카테고리 최저/최고가: cheapest and priciest brands for one category
- 브랜드 관리: add, edit, delete brands and update single prices
"""

import logging

import pandas as pd
import streamlit as st
from dotenv import load_dotenv

from aggregation import format_price, lowest_total_price_payload
from categories import all_categories
from errors import error_response
from price_matrix import price_frame
from schemas import entered_prices

# Load environment variables
load_dotenv()
logging.basicConfig(level=logging.INFO)

st.set_page_config(page_title="브랜드 가격 비교", layout="wide")

st.title("브랜드 가격 비교 🛍️")
st.caption("카테고리별 최저가, 단일 브랜드 최저 총액, 카테고리 최저/최고가")

# ============================================================================
# SERVICE INITIALIZATION
# ============================================================================


@st.cache_resource
def init_service():
    """
    Initialize database connection and the brand service.

    Uses DATABASE_URL (default: local SQLite file).
    """
    from database import get_db_manager
    from seed_data import build_service

    db_manager = get_db_manager()
    if not db_manager.health_check():
        raise RuntimeError("Database connection failed")

    return build_service(db_manager)


try:
    service = init_service()
except Exception as e:
    st.error(f"❌ Failed to initialize services: {e}")
    st.stop()


def show_error(exc: Exception) -> None:
    body, status = error_response(exc)
    st.error(f"❌ [{status}] {body['error']}: {body['message']}")


LABELS = [c.label for c in all_categories()]

page = st.sidebar.radio(
    "메뉴",
    ["카테고리별 최저가", "단일 브랜드 최저가", "카테고리 최저/최고가", "브랜드 관리"],
)

# ============================================================================
# Q1: LOWEST PRICE BY CATEGORY
# ============================================================================

if page == "카테고리별 최저가":
    st.header("카테고리별 최저가격 브랜드")
    try:
        payload = service.lowest_price_by_category().to_dict()
    except Exception as e:
        show_error(e)
        st.stop()

    rows = [
        {"카테고리": item["category"], "브랜드": item["brand"], "가격": item["price"]}
        for item in payload["categories"]
    ]
    st.table(pd.DataFrame(rows))
    st.metric("총액", payload["totalPrice"])

# ============================================================================
# Q2: LOWEST TOTAL PRICE BRAND
# ============================================================================

elif page == "단일 브랜드 최저가":
    st.header("단일 브랜드 최저 총액")
    try:
        payload = lowest_total_price_payload(service.lowest_total_price_brand())
    except Exception as e:
        show_error(e)
        st.stop()

    if not payload:
        st.info("모든 카테고리 가격을 가진 브랜드가 없습니다.")
    else:
        bundle = payload["최저가"]
        st.subheader(f"브랜드: {bundle['브랜드']}")
        st.table(pd.DataFrame(bundle["카테고리"]))
        st.metric("총액", bundle["총액"])

# ============================================================================
# Q3: MIN / MAX BY CATEGORY
# ============================================================================

elif page == "카테고리 최저/최고가":
    st.header("카테고리 최저/최고 가격 브랜드")
    label = st.selectbox("카테고리", LABELS)

    if st.button("조회", type="primary"):
        try:
            payload = service.min_max_price_by_category(label).to_dict()
        except Exception as e:
            show_error(e)
            st.stop()

        st.subheader(payload["카테고리"])
        col_min, col_max = st.columns(2)
        with col_min:
            st.markdown("**최저가**")
            st.table(pd.DataFrame(payload["최저가"]))
        with col_max:
            st.markdown("**최고가**")
            st.table(pd.DataFrame(payload["최고가"]))

# ============================================================================
# BRAND MANAGEMENT
# ============================================================================

else:
    st.header("브랜드 관리")

    brands = service.list_brands()
    by_id = {b.id: b for b in brands}
    table = price_frame(brands)
    if not table.empty:
        display = table.map(lambda v: "" if pd.isna(v) else format_price(v))
        display.columns = LABELS
        display.insert(0, "브랜드", [b.name for b in brands])
        st.dataframe(display, use_container_width=True)
    else:
        st.write("등록된 브랜드가 없습니다.")

    tab_add, tab_edit, tab_price, tab_delete = st.tabs(["추가", "수정", "가격 변경", "삭제"])

    with tab_add:
        with st.form("add_brand"):
            name = st.text_input("브랜드 이름")
            # empty field = not sold
            prices = {
                label: st.number_input(label, min_value=0, step=100, value=None, key=f"add_{label}")
                for label in LABELS
            }
            if st.form_submit_button("추가"):
                try:
                    brand = service.create_brand(name, entered_prices(prices))
                    st.success(f"✓ 브랜드가 성공적으로 생성되었습니다 (ID {brand.id})")
                except Exception as e:
                    show_error(e)

    with tab_edit:
        if brands:
            selected_id = st.selectbox(
                "브랜드", list(by_id), format_func=lambda i: f"{i} · {by_id[i].name}", key="edit_select"
            )
            selected = by_id[selected_id]
            with st.form("edit_brand"):
                name = st.text_input("브랜드 이름", value=selected.name)
                prices = {
                    c.label: st.number_input(
                        c.label, min_value=0, step=100,
                        value=selected.prices.get(c), key=f"edit_{selected.id}_{c.identifier}"
                    )
                    for c in all_categories()
                }
                if st.form_submit_button("저장"):
                    try:
                        service.update_brand(selected.id, name, entered_prices(prices))
                        st.success("✓ 브랜드가 성공적으로 업데이트되었습니다")
                    except Exception as e:
                        show_error(e)

    with tab_price:
        with st.form("update_price"):
            brand_name = st.text_input("브랜드 이름", key="price_brand")
            label = st.selectbox("카테고리", LABELS, key="price_category")
            amount = st.number_input("가격", min_value=0, step=100, value=0)
            if st.form_submit_button("변경"):
                try:
                    service.set_price_by_name(brand_name, label, int(amount))
                    st.success("✓ 브랜드 가격이 성공적으로 업데이트되었습니다")
                except Exception as e:
                    show_error(e)

    with tab_delete:
        if brands:
            selected_id = st.selectbox(
                "브랜드", list(by_id), format_func=lambda i: f"{i} · {by_id[i].name}", key="delete_select"
            )
            selected = by_id[selected_id]
            if st.button("삭제", type="primary"):
                try:
                    service.delete_brand(selected.id)
                    st.success("✓ 브랜드가 성공적으로 삭제되었습니다")
                except Exception as e:
                    show_error(e)

# Footer
st.markdown("---")
st.caption("가격 단위: 원 · 같은 최저가 브랜드는 쉼표로 구분")
