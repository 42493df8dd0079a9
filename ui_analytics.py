import plotly.express as px
import streamlit as st

import analytics
from theme import CHART_COLORS, palette


def create_role_pie_chart(stats, mode):
    p = palette(mode)
    df = analytics.role_stats_frame(stats, sum(s.value for s in stats))
    fig = px.pie(df, names="Role", values="Count", color_discrete_sequence=CHART_COLORS)
    fig.update_traces(textinfo="label+percent")
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font_color=p["text"],
        margin=dict(l=10, r=10, t=10, b=10),
    )
    return fig


def create_role_bar_chart(stats, mode):
    p = palette(mode)
    df = analytics.role_stats_frame(stats, sum(s.value for s in stats))
    fig = px.bar(df, x="Role", y="Count", color_discrete_sequence=[p["primary"]])
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font_color=p["text_secondary"],
        margin=dict(l=10, r=10, t=10, b=10),
        xaxis_title=None,
        yaxis_title=None,
    )
    return fig


def render_analytics(resumes, stats, mode):
    col_pie, col_bar = st.columns(2)
    with col_pie:
        st.markdown("#### Role Distribution")
        if stats:
            st.plotly_chart(create_role_pie_chart(stats, mode), use_container_width=True)
        else:
            st.info(analytics.NO_DATA)
    with col_bar:
        st.markdown("#### Top Roles")
        if stats:
            st.plotly_chart(create_role_bar_chart(stats, mode), use_container_width=True)
        else:
            st.info(analytics.NO_DATA)

    st.markdown("#### Role Rankings")
    if not stats:
        st.info(analytics.NO_DATA)
        return
    st.dataframe(analytics.role_stats_frame(stats, len(resumes)), hide_index=True, use_container_width=True)
